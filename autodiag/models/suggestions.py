from typing import Any, List

from pydantic import BaseModel, Field, field_validator # type: ignore


DEFAULT_CAUSES = ["Unknown cause"]
DEFAULT_ACTIONS = ["Consult a mechanic"]


def _string_list_or_default(value: Any, default: List[str]) -> List[str]:
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return value
    return list(default)


class SuggestionPayload(BaseModel):
    """
    Causes/actions returned by the get_diagnostic_suggestions RPC.

    The RPC returns loosely shaped JSON. Anything that is not a list of
    strings is replaced by a one-element default instead of failing.
    """

    common_causes: List[str] = Field(default_factory=lambda: list(DEFAULT_CAUSES))
    common_actions: List[str] = Field(default_factory=lambda: list(DEFAULT_ACTIONS))

    @field_validator("common_causes", mode="before")
    @classmethod
    def _causes(cls, value):
        return _string_list_or_default(value, DEFAULT_CAUSES)

    @field_validator("common_actions", mode="before")
    @classmethod
    def _actions(cls, value):
        return _string_list_or_default(value, DEFAULT_ACTIONS)

    @classmethod
    def from_rpc(cls, data: Any) -> "SuggestionPayload":
        if not isinstance(data, dict):
            return cls()
        return cls(
            common_causes=data.get("common_causes"),
            common_actions=data.get("common_actions"),
        )
