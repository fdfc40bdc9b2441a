"""OpenAI Responses API client for meal estimation."""

import json
from dataclasses import dataclass, field

from openai import AsyncOpenAI

from food_tracker.services.estimates import ESTIMATE_SCHEMA, EstimateClient

ESTIMATE_INSTRUCTIONS = (
    "Estimate the meal's nutrients and optimal score for this user's day. "
    "Respond with JSON matching the schema."
)


@dataclass
class OpenAIEstimateClient(EstimateClient):
    """Estimation client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    model: str
    reasoning_effort: str | None = None
    store: bool = False
    schema: dict[str, object] = field(default_factory=lambda: ESTIMATE_SCHEMA)

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        api_key: str,
        model: str,
        reasoning_effort: str | None = None,
        store: bool = False,
    ) -> "OpenAIEstimateClient":
        """Create an OpenAI estimation client."""
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            model=model,
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def estimate(self, *, meal_text: str, context: dict[str, object]) -> str:
        """Call OpenAI Responses API with structured outputs."""
        request_payload: dict[str, object] = {
            "model": self.model,
            "instructions": ESTIMATE_INSTRUCTIONS,
            "input": [
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "input_text",
                            "text": json.dumps({"meal_text": meal_text, **context}),
                        }
                    ],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "meal_estimate",
                    "strict": True,
                    "schema": self.schema,
                }
            },
            "store": self.store,
        }
        if self.reasoning_effort:
            request_payload["reasoning"] = {"effort": self.reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
