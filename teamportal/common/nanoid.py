import secrets
import string
from typing import TypeAlias

# Primary keys look like `tblk-XSqS5h9vFTSgP`: a short model abbreviation
# followed by a url safe random suffix. Mirrors gen_nanoid() in the database.
NanoIdType: TypeAlias = str

_CHAR_POOL = string.digits + string.ascii_letters


class NanoId:
    """
    ID used as primary key
    """

    _CHAR_SIZE = 13

    @classmethod
    def gen(cls, abbrev: str | None = None) -> NanoIdType:
        nano_id = ''.join(secrets.choice(_CHAR_POOL) for _ in range(cls._CHAR_SIZE))
        if abbrev:
            nano_id = f'{abbrev}-{nano_id}'

        return nano_id
