"""Canned listings and appraisals for running the scanner without API keys."""

MOCK_LISTINGS = [
    {
        "url": "https://www.ebay.com/itm/123456789001",
        "platform": "ebay",
        "title": "Vintage 1960s Pendleton Wool Board Shirt Mens Medium Blue Plaid Loop Collar",
        "price": 45,
        "imageUrls": [
            "https://i.ebayimg.com/images/g/mock1-main.jpg",
            "https://i.ebayimg.com/images/g/mock1-label.jpg",
            "https://i.ebayimg.com/images/g/mock1-detail.jpg",
        ],
        "description": "Vintage Pendleton board shirt from the 1960s. Made in USA. Loop collar. Blue plaid pattern. Size Medium. Good vintage condition with minor wear.",
        "rawData": {
            "itemId": "123456789001",
            "condition": "Pre-owned",
            "seller": {"username": "vintagethriftfinds", "feedbackScore": 234},
        },
    },
    {
        "url": "https://www.ebay.com/itm/123456789002",
        "platform": "ebay",
        "title": "Old Dress Lot Vintage Clothing 50s 60s Reseller Bundle Mixed Sizes",
        "price": 89,
        "imageUrls": [
            "https://i.ebayimg.com/images/g/mock2-main.jpg",
            "https://i.ebayimg.com/images/g/mock2-pile.jpg",
        ],
        "description": "Lot of old dresses from estate sale. Various sizes and conditions. Selling as-is. Great for resellers or crafters.",
        "rawData": {
            "itemId": "123456789002",
            "condition": "Pre-owned",
            "seller": {"username": "estatesale_clearout", "feedbackScore": 45},
        },
    },
    {
        "url": "https://www.ebay.com/itm/123456789003",
        "platform": "ebay",
        "title": "Vintage Levis 501 Jeans Big E Redline Selvedge 32x30 Single Stitch",
        "price": 150,
        "imageUrls": [
            "https://i.ebayimg.com/images/g/mock3-main.jpg",
            "https://i.ebayimg.com/images/g/mock3-tab.jpg",
            "https://i.ebayimg.com/images/g/mock3-selvedge.jpg",
            "https://i.ebayimg.com/images/g/mock3-stitching.jpg",
        ],
        "description": "Authentic vintage Levis 501 jeans with Big E red tab. Selvedge denim with redline. Single stitch throughout. Some fading and wear consistent with age.",
        "rawData": {
            "itemId": "123456789003",
            "condition": "Pre-owned",
            "seller": {"username": "denim_collector_tx", "feedbackScore": 892},
        },
    },
    {
        "url": "https://www.ebay.com/itm/123456789004",
        "platform": "ebay",
        "title": "Grandmas Old Coat Wool Brown Womens Retro Style Winter Jacket",
        "price": 25,
        "imageUrls": ["https://i.ebayimg.com/images/g/mock4-main.jpg"],
        "description": "Cleaning out grandmas closet. Old brown wool coat. Not sure of the age but looks retro. Has some moth holes.",
        "rawData": {
            "itemId": "123456789004",
            "condition": "Pre-owned",
            "seller": {"username": "cleaningouthouse", "feedbackScore": 12},
        },
    },
    {
        "url": "https://www.ebay.com/itm/123456789005",
        "platform": "ebay",
        "title": "1950s Rockabilly Bowling Shirt Mens Large Chain Stitch Embroidery Two Tone",
        "price": 35,
        "imageUrls": [
            "https://i.ebayimg.com/images/g/mock5-main.jpg",
            "https://i.ebayimg.com/images/g/mock5-back.jpg",
            "https://i.ebayimg.com/images/g/mock5-embroidery.jpg",
        ],
        "description": "Cool old bowling shirt. Has chain stitch embroidery on back that says 'Joes Auto Shop'. Two tone black and cream. Tag says Large.",
        "rawData": {
            "itemId": "123456789005",
            "condition": "Pre-owned",
            "seller": {"username": "picker_mike", "feedbackScore": 567},
        },
    },
    {
        "url": "https://www.ebay.com/itm/123456789006",
        "platform": "ebay",
        "title": "NEW Vintage Style Reproduction 1940s Dress Swing Dance Costume M",
        "price": 65,
        "imageUrls": ["https://i.ebayimg.com/images/g/mock6-main.jpg"],
        "description": "Brand new reproduction 1940s style swing dress. Great for dance events or Halloween. Modern sizing Medium.",
        "rawData": {
            "itemId": "123456789006",
            "condition": "New with tags",
            "seller": {"username": "retrorepro_fashion", "feedbackScore": 1205},
        },
    },
    {
        "url": "https://www.ebay.com/itm/123456789007",
        "platform": "ebay",
        "title": "Vintage 70s Landlubber Bell Bottoms Jeans High Waist 26x32 Deadstock NOS",
        "price": 55,
        "imageUrls": [
            "https://i.ebayimg.com/images/g/mock7-main.jpg",
            "https://i.ebayimg.com/images/g/mock7-label.jpg",
            "https://i.ebayimg.com/images/g/mock7-detail.jpg",
        ],
        "description": "Deadstock vintage Landlubber bell bottom jeans from the 1970s. Never worn, still has original tags. High waist style. 26 inch waist, 32 inch inseam.",
        "rawData": {
            "itemId": "123456789007",
            "condition": "New with tags",
            "seller": {"username": "deadstock_warehouse", "feedbackScore": 2341},
        },
    },
    {
        "url": "https://www.ebay.com/itm/123456789008",
        "platform": "ebay",
        "title": "Old Work Jacket Chore Coat Denim Blanket Lined Vintage Workwear L",
        "price": 40,
        "imageUrls": [
            "https://i.ebayimg.com/images/g/mock8-main.jpg",
            "https://i.ebayimg.com/images/g/mock8-lining.jpg",
        ],
        "description": "Old denim chore coat with blanket lining. Well worn with lots of character. No brand tag but looks old. Size Large approximately.",
        "rawData": {
            "itemId": "123456789008",
            "condition": "Pre-owned",
            "seller": {"username": "barn_finds_ohio", "feedbackScore": 89},
        },
    },
    {
        "url": "https://www.ebay.com/itm/123456789009",
        "platform": "ebay",
        "title": "Vintage ILGWU Union Made Sequin Evening Gown 1960s Cocktail Dress XS",
        "price": 48,
        "imageUrls": [
            "https://i.ebayimg.com/images/g/mock9-main.jpg",
            "https://i.ebayimg.com/images/g/mock9-label.jpg",
            "https://i.ebayimg.com/images/g/mock9-detail.jpg",
            "https://i.ebayimg.com/images/g/mock9-sequins.jpg",
        ],
        "description": "Gorgeous vintage sequin evening gown. Has ILGWU union label dating it to 1960s. Black with silver sequins. Extra small size. Minor sequin loss.",
        "rawData": {
            "itemId": "123456789009",
            "condition": "Pre-owned",
            "seller": {"username": "glamour_vintage", "feedbackScore": 445},
        },
    },
    {
        "url": "https://www.ebay.com/itm/123456789010",
        "platform": "ebay",
        "title": "Carhartt Jacket Detroit Style Canvas Work Coat Mens XL Tan Duck",
        "price": 75,
        "imageUrls": ["https://i.ebayimg.com/images/g/mock10-main.jpg"],
        "description": "Carhartt Detroit jacket in tan duck canvas. Size XL. Normal wear and fading. Made in USA label.",
        "rawData": {
            "itemId": "123456789010",
            "condition": "Pre-owned",
            "seller": {"username": "workwear_surplus", "feedbackScore": 678},
        },
    },
]

MOCK_APPRAISALS = {
    "https://www.ebay.com/itm/123456789001": {
        "isAuthentic": True,
        "estimatedEra": "1960s",
        "estimatedValue": 120,
        "currentPrice": 45,
        "margin": 75,
        "confidence": 0.85,
        "reasoning": "Pendleton board shirts with loop collars are highly collectible. The loop collar indicates pre-1960s manufacture.",
        "redFlags": ["Condition not fully visible in photos"],
        "references": ["Similar Pendleton loop collar sold for $135 on eBay 2024", "Vintage Pendleton price guide"],
    },
    "https://www.ebay.com/itm/123456789002": {
        "isAuthentic": True,
        "estimatedEra": "1950s-1960s",
        "estimatedValue": 200,
        "currentPrice": 89,
        "margin": 111,
        "confidence": 0.6,
        "reasoning": "Estate sale lots often contain hidden gems. If even 2-3 pieces are authentic vintage the lot could be worth significantly more.",
        "redFlags": ["Mixed lot - quality varies", "Cannot verify individual pieces", "As-is condition"],
        "references": ["Vintage dress lots typically yield 2-3x return for experienced resellers"],
    },
    "https://www.ebay.com/itm/123456789003": {
        "isAuthentic": True,
        "estimatedEra": "1960s",
        "estimatedValue": 400,
        "currentPrice": 150,
        "margin": 250,
        "confidence": 0.9,
        "reasoning": "Big E Levi's 501s with redline selvedge are highly valuable. The single stitch construction confirms pre-1971 manufacture.",
        "redFlags": ["Seller may know value - could be auction bait"],
        "references": ["Big E 501s sold for $300-600 on eBay in 2024", "Levi's vintage dating guide confirms Big E = pre-1971"],
    },
    "https://www.ebay.com/itm/123456789004": {
        "isAuthentic": True,
        "estimatedEra": "1950s",
        "estimatedValue": 85,
        "currentPrice": 25,
        "margin": 60,
        "confidence": 0.5,
        "reasoning": "'Grandmas coat' language indicates potential true vintage. Wool coats from 1950s can be valuable if from quality makers.",
        "redFlags": ["Moth holes mentioned", "No label visible", "Only one photo"],
        "references": ["1950s wool coats range $50-200 depending on maker and condition"],
    },
    "https://www.ebay.com/itm/123456789005": {
        "isAuthentic": True,
        "estimatedEra": "1950s",
        "estimatedValue": 180,
        "currentPrice": 35,
        "margin": 145,
        "confidence": 0.88,
        "reasoning": "1950s bowling shirts with chain stitch embroidery are highly collectible. The custom embroidery adds significant value.",
        "redFlags": [],
        "references": ["Chain stitch bowling shirts sold $150-300 on vintage marketplaces"],
    },
    "https://www.ebay.com/itm/123456789007": {
        "isAuthentic": True,
        "estimatedEra": "1970s",
        "estimatedValue": 150,
        "currentPrice": 55,
        "margin": 95,
        "confidence": 0.82,
        "reasoning": "Deadstock 1970s Landlubber jeans are collectible. Original tags add significant value.",
        "redFlags": ["Verify deadstock claim - check for storage wear"],
        "references": ["Deadstock 70s jeans typically sell $100-200"],
    },
    "https://www.ebay.com/itm/123456789008": {
        "isAuthentic": True,
        "estimatedEra": "1960s-1970s",
        "estimatedValue": 120,
        "currentPrice": 40,
        "margin": 80,
        "confidence": 0.7,
        "reasoning": "Blanket-lined denim chore coats are sought after in the workwear market.",
        "redFlags": ["No brand identification", "Heavy wear may limit value"],
        "references": ["Vintage chore coats sell $80-200 depending on condition and brand"],
    },
    "https://www.ebay.com/itm/123456789009": {
        "isAuthentic": True,
        "estimatedEra": "1960s",
        "estimatedValue": 175,
        "currentPrice": 48,
        "margin": 127,
        "confidence": 0.92,
        "reasoning": "ILGWU union label dates this to the 1960s. Sequin evening gowns from this era are highly collectible.",
        "redFlags": ["Minor sequin loss mentioned"],
        "references": ["60s sequin gowns sell $150-300"],
    },
    "https://www.ebay.com/itm/123456789010": {
        "isAuthentic": True,
        "estimatedEra": "1990s",
        "estimatedValue": 95,
        "currentPrice": 75,
        "margin": 20,
        "confidence": 0.75,
        "reasoning": "Made in USA Carhartt Detroit jackets are collectible but this appears to be 1990s production.",
        "redFlags": ["Likely 1990s not pre-1980s", "Common item - many available"],
        "references": ["90s Carhartt Detroit jackets sell $80-120"],
    },
}
