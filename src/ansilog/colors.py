"""
ANSI escape sequences used by the console renderer.

Plain constants. The logger picks the level colors from here and callers
may use the rest to color their own messages, e.g.::

    log.info(f"Device {CYAN}kitchen{nf} is online")
"""

# Styles
RESET = '\x1b[40;0m'
BRIGHT = '\x1b[1m'
DIM = '\x1b[2m'
NORMAL = '\x1b[22m'
UNDERLINE = '\x1b[4m'
UNDERLINEOFF = '\x1b[24m'
REVERSE = '\x1b[7m'
REVERSEOFF = '\x1b[27m'

# 8/16 color foregrounds
BLACK = '\x1b[30m'
RED = '\x1b[31m'
GREEN = '\x1b[32m'
YELLOW = '\x1b[33m'
BLUE = '\x1b[34m'
MAGENTA = '\x1b[35m'
CYAN = '\x1b[36m'
LIGHT_GREY = '\x1b[37m'
GREY = '\x1b[90m'
WHITE = '\x1b[97m'

# Level colors (256 color palette)
db = '\x1b[38;5;245m'   # debug
nf = '\x1b[38;5;252m'   # info
nt = '\x1b[38;5;2m'     # notice
wr = '\x1b[38;5;220m'   # warn
er = '\x1b[38;5;1m'     # error
ft = '\x1b[38;5;9m'     # fatal
rs = '\x1b[40;0m'       # reset foreground and background
rk = '\x1b[K'           # erase from cursor to end of line

# Name tag colors
TIMESTAMP_COLOR = '\x1b[38;5;245m'
NAME_COLOR = '\x1b[38;5;31m'

# Highlighted name tiers, selected by 1-4 leading '*' in the message
HIGHLIGHT_NAME_COLORS = {
    1: '\x1b[38;5;0;48;5;31m',     # black on cyan
    2: '\x1b[38;5;0;48;5;255m',    # black on white
    3: '\x1b[38;5;0;48;5;220m',    # black on yellow
    4: '\x1b[38;5;0;48;5;9m',      # black on red
}


def fg256(color: int) -> str:
    """Foreground escape for a 256 color palette index."""
    return f'\x1b[38;5;{color}m'
