"""
コマンドラインのエントリポイントを検証するテスト。
"""
from chip8_core_tracer.loader.roms import DEMO_ROM, DEMO_ROM_NAME
from chip8_core_tracer.ui import app


def test_missing_rom_exits_with_error(tmp_path, capsys):
    status = app.main([str(tmp_path / "missing.ch8")])
    assert status == 1
    assert "Error" in capsys.readouterr().err

def test_invalid_config_exits_with_error(tmp_path, capsys):
    config = tmp_path / "bad.yaml"
    config.write_text("cycle_hz: 0\n")
    assert app.main(["--config", str(config)]) == 1

def test_prepare_machine_defaults_to_demo():
    args = app.build_parser().parse_args([])
    cpu, config, rom_name = app.prepare_machine(args, start_timers=False)
    try:
        assert rom_name == DEMO_ROM_NAME
        snapshot = cpu.step()
        assert snapshot.bus_activity[0].data == DEMO_ROM[0]
        assert config.legacy_index_increment is False
    finally:
        cpu.shutdown()

def test_prepare_machine_with_rom_and_flags(tmp_path):
    rom = tmp_path / "game.ch8"
    rom.write_bytes(b"\x12\x00")
    args = app.build_parser().parse_args([str(rom), "--legacy-index"])
    cpu, config, rom_name = app.prepare_machine(args, start_timers=False)
    try:
        assert rom_name == str(rom)
        assert cpu.legacy_index_increment is True
        assert config.legacy_index_increment is True
    finally:
        cpu.shutdown()

def test_malformed_config_sections_exit_with_error(tmp_path, capsys):
    for body in ("keymap: [1, 2]\n", "display: 5\n"):
        config = tmp_path / "sections.yaml"
        config.write_text(body)
        assert app.main(["--config", str(config)]) == 1
        assert "must be a mapping" in capsys.readouterr().err
