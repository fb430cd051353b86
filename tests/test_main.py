"""Command-line entry point (headless modes only)."""

from main import main


def test_missing_rom(tmp_path, capsys):
    assert main([str(tmp_path / "nope.ch8")]) == 1
    assert "not found" in capsys.readouterr().err


def test_info(rom_file, capsys):
    assert main([rom_file(0x00E0, name="pong.ch8"), "--info"]) == 0
    out = capsys.readouterr().out
    assert "Title" in out and "pong" in out
    assert "00E0 CLS" in out


def test_oversized_rom(tmp_path, capsys):
    path = tmp_path / "big.ch8"
    path.write_bytes(bytes(5000))
    assert main([str(path)]) == 1
    assert "3584" in capsys.readouterr().err


def test_debug_runs_frames(rom_file, capsys):
    assert main([rom_file(0x6005, 0x7003, 0x1204), "--debug", "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert "Frame 5" in out
    assert "Debug complete." in out


def test_debug_reports_halt(rom_file, capsys):
    assert main([rom_file(0x00EE), "--debug"]) == 1
    assert "halted" in capsys.readouterr().out


def test_bad_cpu_rate(rom_file, capsys):
    assert main([rom_file(0x1200), "--cpu-hz", "0"]) == 1
