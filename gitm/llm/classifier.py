"""
LLM Binary Classifier

Asks the model a yes/no question about a query through a single function
tool. The tool always has a boolean `classification` property; callers add
properties for the values they want extracted when the answer is yes.
"""

import json
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from gitm.configs import get_logger
from gitm.exceptions import ClassifierError, LLMResponseError
from gitm.llm.prompts import BASE_CONTEXT_PROMPT, BINARY_CLASSIFICATION_SYSTEM_PROMPT
from gitm.llm.provider import LLMConfig, LLMProvider, Message, Property, Role, Tool, ToolCall

logger = get_logger("llm.classifier")

T = TypeVar("T")
ArgsT = TypeVar("ArgsT", bound=BaseModel)

TOOL_NAME = "binary_classification"


@dataclass
class BinaryClassificationResult(Generic[T]):
    """Outcome of a binary classifier: the answer plus any extracted value."""

    classification: bool
    content: Optional[T] = None

    @classmethod
    def negative(cls) -> "BinaryClassificationResult[T]":
        return cls(classification=False, content=None)


class LLMBinaryClassifier:
    """
    Reusable LLM-backed binary classifier.

    Args:
        provider: Chat provider used for the call
        instruction: The yes/no question, also used as the tool description
        result_properties: Extra tool properties filled when the answer is yes
        additional_information: Optional context appended to the system prompt
    """

    def __init__(
        self,
        provider: LLMProvider,
        instruction: str,
        result_properties: Optional[dict[str, Property]] = None,
        additional_information: str = "",
    ):
        self.provider = provider
        self.instruction = instruction
        self.result_properties = result_properties or {}
        self.system_prompt = f"{BASE_CONTEXT_PROMPT}\n\n{BINARY_CLASSIFICATION_SYSTEM_PROMPT}"
        if additional_information:
            self.system_prompt += f"\n\n# Additional Information\n{additional_information}"

    def build_tool(self) -> Tool:
        properties = {
            "classification": Property(
                type="boolean",
                description="The binary classification derived from the context and instruction",
            )
        }
        for name, prop in self.result_properties.items():
            properties[name] = Property(
                type=prop.type,
                description=f"{prop.description} (if classification == true)",
            )
        return Tool(
            name=TOOL_NAME,
            description=self.instruction,
            properties=properties,
            required=["classification"],
        )

    def build_messages(self, query: str) -> list[Message]:
        return [
            Message(role=Role.SYSTEM, content=self.system_prompt),
            Message(
                role=Role.USER,
                content=f"# User query\n{query}\n\n# Instruction\n{self.instruction}",
            ),
        ]

    def raw_classification(self, query: str) -> ToolCall:
        """
        Run the model and return its tool call.

        Raises:
            LLMError: The request failed or the model made no tool call
        """
        response = self.provider.chat(
            self.build_messages(query),
            tools=[self.build_tool()],
            config=LLMConfig(temperature=0.0),
        )
        if not response.tool_calls:
            raise LLMResponseError("Model did not return a tool call")
        logger.debug(f"{self.instruction[:60]!r} -> {response.tool_calls[0].arguments}")
        return response.tool_calls[0]

    def classify_arguments(self, query: str, schema: type[ArgsT]) -> ArgsT:
        """
        Run the model and validate its tool-call arguments against `schema`.

        Raises:
            LLMError: The request failed
            ClassifierError: The arguments are not JSON matching the schema
        """
        tool_call = self.raw_classification(query)
        try:
            return schema.model_validate(json.loads(tool_call.arguments))
        except (json.JSONDecodeError, TypeError) as e:
            raise ClassifierError(f"Tool arguments are not JSON: {e}") from e
        except PydanticValidationError as e:
            raise ClassifierError(
                f"Tool arguments do not match {schema.__name__}",
                {"errors": e.error_count()},
            ) from e
