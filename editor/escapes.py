"""
Character reference protection.

XML parsers treat character references such as ``&apos;`` as equivalent to
the character they stand for and are free to rewrite them, and undeclared
entities such as ``&nbsp;`` make a parser reject the file outright. Before a
resource file is parsed, the leading ``&`` of every reference is replaced
with a marker that never occurs in resource files, so the parser only ever
sees plain text. The marker is turned back into ``&`` when the text is
written out, which keeps the original spelling of every reference.
"""

import re

ESCAPE_SEQUENCE_PATTERN = re.compile(r"&([\w#]+;)")
ESCAPE_SEQUENCE_MARKER = "__RESMOVER_ESCAPE_START__"


def protect_escapes(text: str) -> str:
    return ESCAPE_SEQUENCE_PATTERN.sub(lambda m: ESCAPE_SEQUENCE_MARKER + m.group(1), text)


def restore_escapes(text: str) -> str:
    return text.replace(ESCAPE_SEQUENCE_MARKER, "&")
