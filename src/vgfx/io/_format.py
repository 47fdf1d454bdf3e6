"""Internal number formatting shared by the text renderers.

Not intended for public use.
"""


def format_number(value: float, precision: int = 4) -> str:
    """Shortest decimal text for ``value`` rounded to ``precision`` places.

    Examples:
        >>> format_number(80.0)
        '80'
        >>> format_number(2.50)
        '2.5'
        >>> format_number(-0.00001)
        '0'
    """
    text = f"{round(float(value), precision):.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text
