import importlib
import json
import sys

import pytest

from app.dungeon import generate

# run.py is imported as a module; start_server is patched on app.server so no
# network listener is ever opened.


@pytest.fixture()
def run_module(monkeypatch):
    # Ensure a clean import each time (run.py reads VERSION once)
    if 'run' in sys.modules:
        del sys.modules['run']
    mod = importlib.import_module('run')
    # main() installs a SIGINT handler for server mode; keep the test runner's
    monkeypatch.setattr(mod.signal, 'signal', lambda *a, **k: None)
    monkeypatch.delenv('DUNGEON_STRICT_CONNECTIVITY', raising=False)
    return mod


def test_version_flag_outputs_version(run_module, capsys):
    ver = run_module.__version__
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(['--version'])
    assert exc.value.code == 0
    captured = capsys.readouterr().out
    assert ver in captured
    assert 'Dungeon Generator' in captured


def test_default_command_is_generate(run_module):
    ns = run_module.parse_args([])
    assert ns.command == 'generate'
    assert ns.format == 'ascii'


def test_flags_without_subcommand_default_to_generate(run_module, tmp_path):
    ns = run_module.parse_args(['--env-file', str(tmp_path / 'x.env')])
    assert ns.command == 'generate'


def test_generate_ascii(run_module, capsys):
    assert run_module.main(['generate', '--seed', '42', '--width', '30', '--height', '20']) == 0
    out = capsys.readouterr()
    lines = out.out.rstrip('\n').split('\n')
    assert lines[0].startswith('Dungeon: (30, 20) Regions: ')
    assert len(lines) == 21
    assert 'seed' in out.err and '42' in out.err


def test_generate_json_matches_core(run_module, capsys):
    assert run_module.main(['generate', '--seed', '42', '--format', 'json']) == 0
    rows = json.loads(capsys.readouterr().out)
    assert rows == generate(50, 50, 200, 5, 15, seed=42).material_grid()


def test_generate_clamps_sizes(run_module, capsys):
    run_module.main(['generate', '--seed', '1', '--width', '3', '--format', 'json'])
    rows = json.loads(capsys.readouterr().out)
    assert len(rows[0]) == 20


def test_png_requires_out(run_module, capsys):
    assert run_module.main(['generate', '--format', 'png']) == 2
    assert '--out' in capsys.readouterr().err


def test_png_written_to_file(run_module, tmp_path):
    out = tmp_path / 'd.png'
    assert run_module.main(['generate', '--seed', '5', '--format', 'png', '--pixel-size', '2', '--out', str(out)]) == 0
    assert out.read_bytes()[:8] == b'\x89PNG\r\n\x1a\n'


def test_json_written_to_file(run_module, tmp_path):
    out = tmp_path / 'd.json'
    run_module.main(['generate', '--seed', '5', '--format', 'json', '--out', str(out)])
    assert json.loads(out.read_text()) == generate(50, 50, 200, 5, 15, seed=5).material_grid()


def test_strict_flag_from_env(run_module, monkeypatch):
    monkeypatch.setenv('DUNGEON_STRICT_CONNECTIVITY', '1')
    cfg = run_module._build_config(run_module.parse_args(['generate']))
    assert cfg.strict_connectivity is True
    cfg = run_module._build_config(run_module.parse_args(['generate', '--strict']))
    assert cfg.strict_connectivity is True


def test_server_main_invokes_start_server(monkeypatch, run_module, capsys):
    calls = {}

    def fake_start_server(host, port, debug):  # signature match
        calls['called'] = True
        calls['host'] = host
        calls['port'] = port
        calls['debug'] = debug

    monkeypatch.setenv('PORT', '5555')  # ensure env port path is exercised
    monkeypatch.setenv('HOST', '127.0.0.1')

    import app.server as server_mod
    monkeypatch.setattr(server_mod, 'start_server', fake_start_server)

    exit_code = run_module.main(['server'])
    assert exit_code == 0
    assert calls.get('called') is True
    assert calls.get('host') == '127.0.0.1'
    assert calls.get('port') == 5555
    assert calls.get('debug') is False
    assert 'Dungeon Generator Server' in capsys.readouterr().out


def test_server_main_flags(monkeypatch, run_module):
    calls = {}

    def fake_start_server(host, port, debug):
        calls.update(host=host, port=port, debug=debug)

    import app.server as server_mod
    monkeypatch.setattr(server_mod, 'start_server', fake_start_server)
    run_module.main(['server', '--debug', '--host', '127.0.0.2', '--port', '9001'])
    assert calls == {'host': '127.0.0.2', 'port': 9001, 'debug': True}


def test_env_file_argument(monkeypatch, tmp_path, run_module):
    env_file = tmp_path / '.env'
    env_file.write_text('PORT=6001\n')
    # Recorded so teardown also clears the value load_dotenv writes
    monkeypatch.setenv('PORT', '0')
    monkeypatch.delenv('PORT')

    calls = {}

    def fake_start_server(host, port, debug):
        calls['port'] = port

    import app.server as server_mod
    monkeypatch.setattr(server_mod, 'start_server', fake_start_server)

    run_module.main(['--env-file', str(env_file), 'server'])
    assert calls['port'] == 6001
