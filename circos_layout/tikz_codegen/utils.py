import unicodedata

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


def latex_escape(text: str) -> str:
    """Escape node ids and titles for use as LaTeX text."""
    return ''.join(_LATEX_SPECIALS.get(ch, ch) for ch in _strip_combining(str(text)))


def color_name(index: int) -> str:
    """TikZ color name for the node at ``index`` in model order."""
    return f'cs{index}'
