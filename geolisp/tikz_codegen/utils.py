import re
import unicodedata
from typing import List

_DEGREE_RE = re.compile(r'(-?\d+(?:\.\d+)?)°')

_LATEX_SPECIALS = {
    '\\': r'\textbackslash{}',
    '&':  r'\&',
    '%':  r'\%',
    '$':  r'\$',
    '#':  r'\#',
    '_':  r'\_',
    '{':  r'\{',
    '}':  r'\}',
    '~':  r'\textasciitilde{}',
    '^':  r'\textasciicircum{}',
}


def _strip_combining(text: str) -> str:
    text = unicodedata.normalize('NFC', text)
    return ''.join(ch for ch in text if unicodedata.category(ch) != 'Mn')


def _escape_text_segment(text: str) -> str:
    text = _strip_combining(text)
    return ''.join(_LATEX_SPECIALS.get(c, c) for c in text)


def latex_label(text: str) -> str:
    """Escape a diagram label for TikZ; degree measures become ``$60.0^\\circ$``."""
    parts: List[str] = []
    pos = 0
    for m in _DEGREE_RE.finditer(text):
        parts.append(_escape_text_segment(text[pos:m.start()]))
        parts.append(f'${m.group(1)}^\\circ$')
        pos = m.end()
    parts.append(_escape_text_segment(text[pos:]))
    return ''.join(parts)
