"""Entry point for the Dama game
Run: python -m dama.main [--mode <pvp|pvc>] [--computer <1|2>] [--depth <n>] [--config <path>]
Options:
--mode       : pvp for two local players, pvc to play against the computer
--computer   : side played by the computer in pvc mode (default 2)
--depth      : search depth in plies for the computer
--config     : TOML file with [search] and [ui] sections
"""

import os
import sys
from typing import Optional, Tuple

from dama.ai import ComputerOpponent
from dama.config import Config, setup_logging
from dama.engine.search import SearchEngine
from dama.game import MODES, Game
from dama.ui import PygameUI


def _value_after(argv, flag: str) -> Optional[str]:
    if flag in argv:
        idx = argv.index(flag)
        if idx + 1 < len(argv):
            return argv[idx + 1]
        print(f'Warning: {flag} provided but no value given; ignoring')
    return None


def parse_args(argv) -> Tuple[Config, Optional[str]]:
    """Load the config file and apply command line overrides on top of it."""
    config_path = _value_after(argv, '--config') or os.environ.get('DAMA_CONFIG_TOML', 'dama.toml')
    cfg = Config.load_from_toml(config_path)

    mode = _value_after(argv, '--mode')
    if mode is not None:
        if mode.lower() in MODES:
            cfg.mode = mode.lower()
        else:
            print(f'Warning: unknown mode {mode!r}; expected one of {", ".join(MODES)}')

    computer = _value_after(argv, '--computer')
    if computer is not None:
        if computer in ('1', '2'):
            cfg.computer_player = int(computer)
        else:
            print(f'Warning: --computer must be 1 or 2, got {computer!r}; ignoring')

    depth = _value_after(argv, '--depth')
    if depth is not None:
        try:
            cfg.search.depth = max(1, int(depth))
        except ValueError:
            print(f'Warning: --depth must be an integer, got {depth!r}; ignoring')

    return cfg, config_path


def main(argv=None):
    argv = argv or sys.argv[1:]
    cfg, _ = parse_args(argv)
    setup_logging(cfg.log_level)

    game = Game(mode=cfg.mode, computer_player=cfg.computer_player)
    engine = SearchEngine(depth=cfg.search.depth, cache_size=cfg.search.cache_size)
    opponent = ComputerOpponent(engine, player=cfg.computer_player, move_delay=cfg.ui.move_delay)
    ui = PygameUI(game, opponent=opponent, config=cfg.ui)

    try:
        ui.run()
    except Exception as e:
        print("Error running UI:", e)
        print("If this is an ImportError for pygame, install it with: python -m pip install pygame")
        raise


if __name__ == "__main__":
    main()
