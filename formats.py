"""Text rendering shared by the three complex tiers."""

def format_g(x: float) -> str:
    """C-style %g: 6 significant digits, trailing zeros dropped."""
    return "%g" % x

def render_complex(re: str, im: str, *, re_zero: bool, im_zero: bool,
                   im_one: bool, im_neg_one: bool, im_neg: bool) -> str:
    """Lay out a complex value from its rendered components.

    The caller decides the predicates in its own number domain (integer,
    rational or double) so that e.g. a rational 1 is recognised by value:

        0 + 0i      -> "0"
        a + 0i      -> "a"
        0 + 1i      -> "i"           0 - 1i   -> "-i"
        0 + bi      -> "bi"
        a + 1i      -> "a+i"         a - 1i   -> "a-i"
        a + bi, b<0 -> "a-|b|i"      (b carries its own sign)
        a + bi      -> "a+bi"
    """
    if re_zero and im_zero:
        return "0"
    if im_zero:
        return re
    if re_zero:
        if im_one:
            return "i"
        if im_neg_one:
            return "-i"
        return f"{im}i"
    if im_one:
        return f"{re}+i"
    if im_neg_one:
        return f"{re}-i"
    if im_neg:
        return f"{re}{im}i"
    return f"{re}+{im}i"
