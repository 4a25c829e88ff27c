import json

from ..exceptions import MalformedAppraisalResponse


def extract_json_object(text: str) -> dict:
    """Pull the outermost ``{...}`` object out of free-form model output.

    Takes everything from the first ``{`` to the last ``}``, which tolerates
    markdown fences and chatter around the object.
    """
    if not text:
        raise MalformedAppraisalResponse("empty response", text or "")

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise MalformedAppraisalResponse("no JSON object found in response", text)

    try:
        data = json.loads(text[start : end + 1])
    except json.JSONDecodeError as e:
        raise MalformedAppraisalResponse(f"invalid JSON ({e.msg})", text) from e

    if not isinstance(data, dict):
        raise MalformedAppraisalResponse("response JSON is not an object", text)
    return data
