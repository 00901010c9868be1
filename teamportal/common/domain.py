from typing import Any, Dict

from humps import camelize  # type: ignore[attr-defined]
from pydantic import BaseModel, ConfigDict


def to_camel(string: str) -> str:
    return camelize(string)


BaseDomainConfig = ConfigDict(
    extra='forbid',
    use_enum_values=True,
    from_attributes=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class BaseDomain(BaseModel):
    model_config = BaseDomainConfig

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    def get_provided_fields(self) -> Dict[str, Any]:
        """
        Return only fields that were explicitly provided in the input data.

        This distinguishes between:
        - Fields with default values that were NOT provided (excluded)
        - Fields explicitly set to None/null (included)

        Useful for partial updates (only update provided fields).

        Example:
            # Frontend sends: {"startAt": "...", "note": null}
            # Domain has: start_at: datetime | None = None, end_at: datetime | None = None, note: str | None = None

            obj.to_dict()  # {"start_at": ..., "end_at": None, "note": None}
            obj.get_provided_fields()  # {"start_at": ..., "note": None}  (end_at excluded)
        """
        return self.model_dump(exclude_unset=True)

    def was_field_provided(self, field_name: str) -> bool:
        """
        Check if a specific field was explicitly provided in the input data.

        Returns True if field was in the original input (even if set to None/null).
        Returns False if field was not provided and got its default value.
        """
        return field_name in self.model_fields_set

    def __repr_str__(self, join_str: str) -> str:  # type: ignore[override]
        tab = '\n    '
        return (
            tab
            + f'{join_str}{tab}'.join(repr(v) if a is None else f'{a}={v!r}' for a, v in self.__repr_args__())
            + '\n'
        )
