"""Numeric helpers shared by decision variables."""


def clamp(value: float, lower: float, upper: float) -> float:
    """
    Restricts a crisp input to the domain of its membership functions.

    Values outside the domain would get degree 0 from every function of the
    variable, so they are pulled inside with a fixed one-unit margin:
    below lower + 1 becomes lower + 1, above upper - 1 becomes upper - 1.
    The margin is part of the tuned rule tables and is not configurable.

    Args:
        value (float): The raw input.
        lower (float): Lowest value of the variable's domain.
        upper (float): Highest value of the variable's domain.

    Returns:
        float: The clamped value.
    """
    if value < lower + 1:
        return lower + 1
    if value > upper - 1:
        return upper - 1
    return value
