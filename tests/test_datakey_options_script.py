import base64
import importlib.util
import json
import logging
import os

import pytest

SCRIPT = os.path.join(os.path.dirname(__file__), '..', 'scripts', 'datakey_options.py')


@pytest.fixture
def script(monkeypatch):
    for var in ('DATAKEY_MASTER_KEY', 'DATAKEY_KEY_ALT_NAMES', 'DATAKEY_KEY_MATERIAL'):
        monkeypatch.delenv(var, raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level

    spec = importlib.util.spec_from_file_location("datakey_options", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    yield module

    root.handlers[:] = handlers
    root.setLevel(level)


def test_prints_redacted_kwargs(script, monkeypatch, capsys):
    monkeypatch.setenv('DATAKEY_MASTER_KEY', json.dumps({"region": "us-east-1", "key": "arn:aws:kms:x"}))
    monkeypatch.setenv('DATAKEY_KEY_ALT_NAMES', 'altname1')
    monkeypatch.setenv('DATAKEY_KEY_MATERIAL', base64.b64encode(b"\x07" * 96).decode())

    assert script.main(['--provider', 'aws']) == 0

    out = json.loads(capsys.readouterr().out)
    assert out == {
        "kms_provider": "aws",
        "master_key": {"region": "us-east-1", "key": "arn:aws:kms:x"},
        "key_alt_names": ["altname1"],
        "key_material": "<96 bytes>",
    }


def test_local_provider_omits_master_key(script, monkeypatch, capsys):
    monkeypatch.setenv('DATAKEY_MASTER_KEY', '{"key": "unused"}')

    assert script.main(['--provider', 'local']) == 0

    out = json.loads(capsys.readouterr().out)
    assert out["master_key"] is None


def test_invalid_environment_exits_1(script, monkeypatch, capsys):
    monkeypatch.setenv('DATAKEY_KEY_MATERIAL', 'not base64!')

    assert script.main(['--provider', 'aws']) == 1
    assert capsys.readouterr().out == ""
