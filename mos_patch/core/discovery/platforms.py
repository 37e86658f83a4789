from __future__ import annotations
import re
from typing import Dict

# <select name=plat_lang ...>
# <option value="999" selected>Select up to 20
# <option value="226P">Linux x86-64
# ...
# </select>
_SELECT_RE = re.compile(r"<select name=plat_lang.*</select>", re.DOTALL)


def parse_platform_options(html: str) -> Dict[str, str]:
    """Map platform/language code -> description from the simple-search form."""
    m = _SELECT_RE.search(html or "")
    if not m:
        return {}
    out: Dict[str, str] = {}
    for line in m.group(0).splitlines():
        if "option" not in line or "selected" in line:
            continue
        parts = line.split('"')
        if len(parts) < 2 or ">" not in line:
            continue
        code = parts[1].strip()
        desc = line.split(">", 1)[1].split("<", 1)[0].strip()
        if code:
            out[code] = desc
    return out
