import asyncio
import base64
import json
import logging

import boto3
from botocore.config import Config
from botocore.exceptions import ConnectionError as BotoConnectionError
from botocore.exceptions import HTTPClientError

from ..exceptions import TransientInferenceError

logger = logging.getLogger(__name__)


def build_bedrock_client(region: str, endpoint_url: str | None = None):
    """bedrock-runtime client that makes exactly one HTTP request per call.

    Retries belong to the appraiser, which waits 15s/30s between attempts;
    botocore's own retry handler is switched off.
    """
    return boto3.client(
        "bedrock-runtime",
        region_name=region,
        endpoint_url=endpoint_url,
        config=Config(retries={"total_max_attempts": 1, "mode": "standard"}),
    )


class BedrockVisionClient:
    """Send images plus a text prompt to Claude via AWS Bedrock.

    Connection failures surface as ``TransientInferenceError``; service
    errors (throttling included) propagate as botocore ``ClientError``.
    """

    def __init__(
        self,
        region: str = "us-east-1",
        model_id: str = "us.anthropic.claude-sonnet-4-20250514-v1:0",
        max_tokens: int = 2048,
        temperature: float = 0.2,
        client=None,
    ):
        self.region = region
        self.model_id = model_id
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._client = client or build_bedrock_client(region)

    def build_request(self, images: list[tuple[bytes, str]], prompt: str) -> str:
        content = []
        for img_bytes, media_type in images:
            content.append(
                {
                    "type": "image",
                    "source": {
                        "type": "base64",
                        "media_type": media_type,
                        "data": base64.b64encode(img_bytes).decode("utf-8"),
                    },
                }
            )
        content.append({"type": "text", "text": prompt})

        return json.dumps(
            {
                "anthropic_version": "bedrock-2023-05-31",
                "max_tokens": self.max_tokens,
                "messages": [{"role": "user", "content": content}],
                "temperature": self.temperature,
            }
        )

    async def infer(self, images: list[tuple[bytes, str]], prompt: str) -> str:
        """Return the model's raw text answer."""
        request_body = self.build_request(images, prompt)

        # boto3 is synchronous; keep the event loop free
        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(
                None,
                lambda: self._client.invoke_model(
                    modelId=self.model_id,
                    body=request_body,
                    contentType="application/json",
                    accept="application/json",
                ),
            )
        except (BotoConnectionError, HTTPClientError) as e:
            raise TransientInferenceError(f"Bedrock connection failed: {e}") from e

        response_body = json.loads(response["body"].read())
        stop_reason = response_body.get("stop_reason", "unknown")
        for block in response_body.get("content", []):
            if block.get("type") == "text":
                return block.get("text", "").strip()

        logger.warning(f"No text in vision response (stop_reason={stop_reason})")
        return ""
