"""
Free-text interpretation into a validated radar spec.
"""

from __future__ import annotations

from typing import Optional

from workflow_radar.core.constants import MAX_INTERPRETATION_INPUT_CHARS
from workflow_radar.core.exceptions import InputTooLongError, InvalidRequestError
from workflow_radar.core.logging import get_logger
from workflow_radar.domain.interpretation import InterpretationContext, InterpretationResult
from workflow_radar.reasoning.base import ReasoningClient
from workflow_radar.services.parsing import parse_json_object, validate_payload
from workflow_radar.services.prompts import (
    INTERPRETATION_SYSTEM_PROMPT,
    build_interpretation_prompt,
)

logger = get_logger(__name__)


class InterpretationValidator:
    """
    Interprets free text through the reasoning capability and validates the
    answer against the radar schema.

    One outbound call per invocation, never retried here.
    """

    def __init__(
        self,
        client: ReasoningClient,
        default_model: str,
        max_input_chars: int = MAX_INTERPRETATION_INPUT_CHARS,
    ) -> None:
        """
        Initialize the validator.

        Args:
            client: Reasoning capability
            default_model: Model used when a call does not select one
            max_input_chars: Longest accepted input
        """
        self.client = client
        self.default_model = default_model
        self.max_input_chars = max_input_chars

    def check_input(self, text: str) -> str:
        """
        Validate raw input before anything is sent out.

        Raises:
            InvalidRequestError: input is blank
            InputTooLongError: input exceeds ``max_input_chars``
        """
        if len(text) > self.max_input_chars:
            raise InputTooLongError(len(text), self.max_input_chars)
        stripped = text.strip()
        if not stripped:
            raise InvalidRequestError("Input must not be empty", field="input")
        return stripped

    async def interpret(
        self,
        text: str,
        context: Optional[InterpretationContext] = None,
        model: Optional[str] = None,
    ) -> InterpretationResult:
        """
        Turn ``text`` into an InterpretationResult.

        Raises:
            InvalidRequestError / InputTooLongError: caller input problems
            MalformedResponseError: the capability answered with non-JSON
            SchemaViolationError: the answer breaks the radar schema
            UpstreamUnavailableError: the capability could not be reached
        """
        cleaned = self.check_input(text)
        model_id = model or self.default_model

        logger.info("Interpreting input", model=model_id, input_chars=len(cleaned))

        raw = await self.client.generate(
            INTERPRETATION_SYSTEM_PROMPT,
            build_interpretation_prompt(cleaned, context),
            model_id,
        )

        data = parse_json_object(raw, "Interpretation")
        result = validate_payload(InterpretationResult, data, "Interpretation")

        logger.info(
            "Interpretation complete",
            topic=result.what.topic,
            is_valid=result.what.is_valid,
            confidence=result.what.confidence,
        )
        return result
