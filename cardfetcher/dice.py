"""Dice rolling for the !roll command."""

import random

MIN_SIDES = 2
MAX_SIDES = 1000

INVALID_SIDES_MESSAGE = "You must input a valid number of sides."


def roll(argument: str, rng: random.Random | None = None) -> str:
    """
    Roll one die with the given number of sides, e.g. roll("20").

    Anything that isn't a whole number between MIN_SIDES and MAX_SIDES gets
    INVALID_SIDES_MESSAGE back instead of a roll.
    """
    argument = argument.strip()
    if not argument.isdecimal():
        return INVALID_SIDES_MESSAGE

    sides = int(argument)
    if sides < MIN_SIDES or sides > MAX_SIDES:
        return INVALID_SIDES_MESSAGE

    rng = rng or random
    return f"Rolled a d{sides}: {rng.randint(1, sides)}"
