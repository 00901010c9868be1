from datetime import datetime
from typing import Optional

from pydantic import Field, computed_field, field_validator

from teamportal.app.time_blocks.codec import format_summary, parse_summary
from teamportal.app.time_blocks.constants import (
    DEFAULT_LABEL,
    SUMMARY_MAX_LENGTH,
    TIME_BLOCK_PK_ABBREV,
    TimeBlockLabel,
)
from teamportal.common.domain import BaseDomain
from teamportal.common.nanoid import NanoId, NanoIdType


class _LabelledInput(BaseDomain):
    label: Optional[TimeBlockLabel] = None
    note: Optional[str] = Field(default=None, max_length=SUMMARY_MAX_LENGTH)
    # Packed "Label\n\nNote" form, used when label and note are not given
    summary: Optional[str] = Field(default=None, max_length=SUMMARY_MAX_LENGTH)

    @field_validator('note', 'summary')
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    def resolve_label_and_note(self) -> tuple[TimeBlockLabel, str | None]:
        if self.was_field_provided('label') or self.was_field_provided('note'):
            return TimeBlockLabel(self.label or DEFAULT_LABEL), self.note
        return parse_summary(self.summary)


class TimeBlockCreate(_LabelledInput):
    start_at: datetime
    end_at: datetime


class TimeBlockUpdate(_LabelledInput):
    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None

    def get_label_changes(self) -> dict[str, TimeBlockLabel | str | None]:
        """
        Label and note given separately win over the packed summary, and each
        is only touched when provided.
        """
        provided = self.model_fields_set
        if provided & {'label', 'note'}:
            changes: dict[str, TimeBlockLabel | str | None] = {}
            if 'label' in provided:
                changes['label'] = TimeBlockLabel(self.label or DEFAULT_LABEL)
            if 'note' in provided:
                changes['note'] = self.note
            return changes

        if 'summary' in provided:
            label, note = parse_summary(self.summary)
            return {'label': label, 'note': note}

        return {}

    def has_changes(self) -> bool:
        return bool(self.model_fields_set)


class TimeBlockInsert(BaseDomain):
    id: Optional[NanoIdType] = Field(default_factory=lambda: NanoId.gen(abbrev=TIME_BLOCK_PK_ABBREV))
    user_id: NanoIdType
    start_at: datetime
    end_at: datetime
    label: TimeBlockLabel = DEFAULT_LABEL
    note: Optional[str] = None


class TimeBlockRead(BaseDomain):
    id: NanoIdType
    user_id: NanoIdType
    start_at: datetime
    end_at: datetime
    label: TimeBlockLabel = DEFAULT_LABEL
    note: Optional[str] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None

    @computed_field
    @property
    def summary(self) -> str:
        return format_summary(self.label, self.note)

    @property
    def duration(self):
        return self.end_at - self.start_at
