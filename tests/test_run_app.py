"""
Tests for the Streamlit launcher.
"""

import subprocess
import sys

import run_app


class Completed:
    returncode = 0


def test_command_points_at_web_app():
    command = run_app.build_command('9000')
    assert command[:4] == [sys.executable, '-m', 'streamlit', 'run']
    assert command[4].endswith('folio_web_app.py')
    assert command[-2:] == ['--server.port', '9000']


def test_headless_flag():
    assert run_app.build_command('8501', headless=True)[-2:] == ['--server.headless', 'true']


def test_main_uses_port_from_environment(monkeypatch):
    calls = []
    monkeypatch.setenv('FOLIO_PORT', '8600')
    monkeypatch.setattr(subprocess, 'run', lambda command: calls.append(command) or Completed())

    assert run_app.main([]) == 0
    assert calls[0][-2:] == ['--server.port', '8600']


def test_main_port_option_wins(monkeypatch):
    calls = []
    monkeypatch.setenv('FOLIO_PORT', '8600')
    monkeypatch.setattr(subprocess, 'run', lambda command: calls.append(command) or Completed())

    run_app.main(['--port', '9100'])
    assert calls[0][-2:] == ['--server.port', '9100']
