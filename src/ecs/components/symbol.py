from enum import Enum


class Symbol(Enum):
    """The seven emotions a block can carry.

    Values are the emoji glyphs shown on the board. Declaration order is the
    alphabet order: random draws index into it and ties between symbols are
    broken by it.
    """

    HAPPINESS = "😊"
    SADNESS = "😢"
    ANGER = "😡"
    FEAR = "😨"
    DISGUST = "🤢"
    SURPRISE = "😲"
    CONTEMPT = "😤"

    @property
    def glyph(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


SYMBOLS: tuple[Symbol, ...] = tuple(Symbol)

# Tile background colours used by the renderer, one per emotion.
SYMBOL_COLORS: dict[Symbol, tuple[int, int, int]] = {
    Symbol.HAPPINESS: (238, 196, 64),
    Symbol.SADNESS: (84, 130, 206),
    Symbol.ANGER: (204, 62, 58),
    Symbol.FEAR: (140, 104, 186),
    Symbol.DISGUST: (96, 168, 88),
    Symbol.SURPRISE: (232, 140, 62),
    Symbol.CONTEMPT: (120, 120, 132),
}
