# chip8_core_tracer/ui/app.py
"""
アプリケーションのエントリポイント。
ROMとマシン構成を読み込み、メインウィンドウを起動します。
"""
import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from chip8_core_tracer.common.errors import RomLoadError
from chip8_core_tracer.config.builder import SystemBuilder
from chip8_core_tracer.config.loader import ConfigLoader
from chip8_core_tracer.config.models import MachineConfig
from chip8_core_tracer.loader.loader import RomLoader
from chip8_core_tracer.loader.roms import DEMO_ROM, DEMO_ROM_NAME
from .main_window import MainWindow

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chip8-core-tracer", description="CHIP-8 interpreter")
    parser.add_argument("rom", nargs="?", help="ROM file to run (default: bundled demo)")
    parser.add_argument("--config", help="YAML machine configuration")
    parser.add_argument("--legacy-index", action="store_true",
                        help="increment I after Fx55/Fx65 (original CHIP-8 behaviour)")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


# @intent:responsibility 設定とROMを読み込んだマシンを構築します。ROMの読み込み失敗はRomLoadErrorとして伝播します。
def prepare_machine(args: argparse.Namespace, start_timers: bool = True):
    config = ConfigLoader().load_from_file(args.config) if args.config else MachineConfig()
    if args.legacy_index:
        config.legacy_index_increment = True

    cpu, bus = SystemBuilder().build_system(config, start_timers=start_timers)
    loader = RomLoader()
    try:
        if args.rom:
            loader.load_rom_file(args.rom, bus)
            rom_name = args.rom
        else:
            loader.load_rom_bytes(DEMO_ROM, bus)
            rom_name = DEMO_ROM_NAME
    except RomLoadError:
        cpu.shutdown()
        raise
    return cpu, config, rom_name


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    try:
        cpu, config, rom_name = prepare_machine(args)
    except (RomLoadError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    logger.info("Running %s", rom_name)

    app = QApplication(sys.argv[:1])
    main_win = MainWindow(cpu, config, rom_name)
    main_win.show()
    main_win.start()
    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
