from enum import Enum
from typing import Sequence, Tuple
from maze_carver.core.grid import Grid

class RenderMode(Enum):
    SIMPLE_ASCII = "ascii"
    UTF8_HALLS = "utf8_halls"
    UTF8_LINES = "utf8_lines"

# Indexed by cell value: bit 1=N, 2=S, 4=E, 8=W.
# Each sprite is (top row, bottom row), three characters wide.
SIMPLE_SPRITES: Tuple[Tuple[str, str], ...] = (
    ("   ", "   "), # none
    ("| |", "+-+"), # N
    ("+-+", "| |"), # S
    ("| |", "| |"), # N S
    ("+--", "+--"), # E
    ("| .", "+--"), # N E
    ("+--", "| ."), # S E
    ("| .", "| ."), # N S E
    ("--+", "--+"), # W
    (". |", "--+"), # N W
    ("--+", ". |"), # S W
    (". |", ". |"), # N S W
    ("---", "---"), # E W
    (". .", "---"), # N E W
    ("---", ". ."), # S E W
    (". .", ". ."), # all
)

UTF8_SPRITES: Tuple[Tuple[str, str], ...] = (
    ("   ", "   "),
    ("│ │", "└─┘"),
    ("┌─┐", "│ │"),
    ("│ │", "│ │"),
    ("┌──", "└──"),
    ("│ └", "└──"),
    ("┌──", "│ ┌"),
    ("│ └", "│ ┌"),
    ("──┐", "──┘"),
    ("┘ │", "──┘"),
    ("──┐", "┐ │"),
    ("┘ │", "┐ │"),
    ("───", "───"),
    ("┘ └", "───"),
    ("───", "┐ ┌"),
    ("┘ └", "┐ ┌"),
)

UTF8_LINES: Tuple[str, ...] = (
    " ", "╵", "╷", "│", "╶", "└", "┌", "├",
    "╴", "┘", "┐", "┤", "─", "┴", "┬", "┼",
)

def render_with_sprites(grid: Grid, sprites: Sequence[Tuple[str, str]]) -> str:
    lines = []
    for row in grid.rows():
        top, bottom = [], []
        for cell in row:
            sprite = sprites[cell]
            top.append(sprite[0])
            bottom.append(sprite[1])
        lines.append("".join(top))
        lines.append("".join(bottom))
    return "".join(line + "\n" for line in lines)

def to_simple_ascii(grid: Grid) -> str:
    return render_with_sprites(grid, SIMPLE_SPRITES)

def to_utf8_halls(grid: Grid) -> str:
    return render_with_sprites(grid, UTF8_SPRITES)

def to_utf8_lines(grid: Grid) -> str:
    return "".join("".join(UTF8_LINES[cell] for cell in row) + "\n" for row in grid.rows())

_RENDERERS = {
    RenderMode.SIMPLE_ASCII: to_simple_ascii,
    RenderMode.UTF8_HALLS: to_utf8_halls,
    RenderMode.UTF8_LINES: to_utf8_lines,
}

def render(grid: Grid, mode=RenderMode.SIMPLE_ASCII) -> str:
    """
    Renders the grid as text. mode is a RenderMode or its string value
    ("ascii", "utf8_halls", "utf8_lines").
    """
    try:
        mode = RenderMode(mode)
    except ValueError:
        raise ValueError(f"Unknown render mode: {mode!r}") from None
    return _RENDERERS[mode](grid)
