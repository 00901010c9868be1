from teamportal.common.enum import BaseEnum

TIME_BLOCK_PK_ABBREV = 'tblk'

# Packed "Label\n\nNote" text accepted from older clients
SUMMARY_DELIMITER = '\n\n'
SUMMARY_MAX_LENGTH = 2000


class TimeBlockLabel(BaseEnum):
    WORK = 'Work'
    SLEEP = 'Sleep'
    IDLE = 'Idle'
    ABSENT = 'Absent'


DEFAULT_LABEL = TimeBlockLabel.WORK
