"""Tag instruction names.

Tags give Push a write-once/read-many binding: ``tag_exec_N`` stores the code
that follows it under tag N and ``tagged_N`` later pushes whatever was stored
under N. Execution belongs to the interpreter; this module only builds and
reads the instruction symbols.
"""

import re
from typing import Optional, Tuple

TAG_WRITE_PREFIX = "tag_exec_"
TAG_REFERENCE_PREFIX = "tagged_"

_TAG_RE = re.compile(rf"^({TAG_WRITE_PREFIX}|{TAG_REFERENCE_PREFIX})(\d+)$")


def tag_write_instruction(tag: int) -> str:
    return f"{TAG_WRITE_PREFIX}{tag}"


def tag_reference_instruction(tag: int) -> str:
    return f"{TAG_REFERENCE_PREFIX}{tag}"


def parse_tag_instruction(atom) -> Optional[Tuple[str, int]]:
    """Return ("write" | "reference", tag) for a tag instruction, else None."""
    if not isinstance(atom, str):
        return None
    match = _TAG_RE.match(atom)
    if match is None:
        return None
    kind = "write" if match.group(1) == TAG_WRITE_PREFIX else "reference"
    return kind, int(match.group(2))
