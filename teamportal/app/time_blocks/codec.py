"""
Translation between the split label/note columns and the packed summary text
older clients still send and read.
"""

from teamportal.app.time_blocks.constants import DEFAULT_LABEL, SUMMARY_DELIMITER, TimeBlockLabel


def parse_summary(summary: str | None) -> tuple[TimeBlockLabel, str | None]:
    """
    "Sleep\\n\\nnap after lunch" -> (Sleep, "nap after lunch")
    "Idle"                       -> (Idle, None)
    "call with client"           -> (Work, "call with client")
    """
    if summary is None or not summary.strip():
        return DEFAULT_LABEL, None

    title, delimiter, content = summary.partition(SUMMARY_DELIMITER)
    title = title.strip()
    if not TimeBlockLabel.has(title):
        # Free text without a recognised label is kept whole as the note
        return DEFAULT_LABEL, summary.strip()

    return TimeBlockLabel(title), content.strip() or None


def format_summary(label: TimeBlockLabel | str | None, note: str | None) -> str:
    label = TimeBlockLabel(label) if label else DEFAULT_LABEL
    note = note.strip() if note else ''
    if not note:
        return label.value

    return f'{label.value}{SUMMARY_DELIMITER}{note}'
