REVENUE_ENTRY_PK_ABBREV = 'rev'
EXPECTED_REVENUE_PK_ABBREV = 'xrev'

MIN_TARGET_YEAR = 2000
MAX_TARGET_YEAR = 2100

NOTE_MAX_LENGTH = 2000
