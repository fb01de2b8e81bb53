import json

import pytest
from typer.testing import CliRunner

import snip12.version as version_mod
from snip12.cli.main import app, main
from snip12.typed_data import encode_type, get_message_hash, get_struct_hash
from snip12.version import __version__

ACCOUNT = "0xcd2a3d9f938e13cd947ec05abc7fe734df8dd826"

runner = CliRunner()


def _write(tmp_path, doc, name="doc.json"):
    path = tmp_path / name
    path.write_text(json.dumps(doc), encoding="utf-8")
    return path


@pytest.fixture
def mail_file(tmp_path, mail):
    return _write(tmp_path, mail)


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_version_falls_back_to_source_tree(monkeypatch):
    def _missing(name):
        raise version_mod.metadata.PackageNotFoundError(name)

    monkeypatch.setattr(version_mod.metadata, "version", _missing)
    assert version_mod.version() == __version__


def test_hash(mail, mail_file):
    result = runner.invoke(app, ["hash", str(mail_file), "--account", ACCOUNT])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == get_message_hash(mail, ACCOUNT)


def test_encode_type(mail, mail_file):
    result = runner.invoke(app, ["encode-type", str(mail_file)])
    assert result.exit_code == 0
    assert result.output.strip() == encode_type(mail["types"], "Mail")

    result = runner.invoke(app, ["encode-type", str(mail_file), "-t", "Person"])
    assert result.output.strip() == "Person(name:felt,wallet:felt)"


def test_type_hash(mail_file):
    result = runner.invoke(app, ["type-hash", str(mail_file), "--type", "StarkNetDomain"])
    assert result.exit_code == 0
    assert result.output.strip() == "0x1bfc207425a47a5dfa1a50a4f5241203f50624ca5fdf5e18755765416b8e288"


def test_struct_hash_of_domain(mail, mail_file):
    result = runner.invoke(app, ["struct-hash", str(mail_file), "-t", "StarkNetDomain"])
    assert result.exit_code == 0
    assert result.output.strip() == get_struct_hash(mail["types"], "StarkNetDomain", mail["domain"])


def test_revision(tmp_path, mail_file, enum_doc):
    assert runner.invoke(app, ["revision", str(mail_file)]).output.strip() == "legacy"
    active = _write(tmp_path, enum_doc, "enum.json")
    assert runner.invoke(app, ["revision", str(active)]).output.strip() == "active"


def test_invalid_document_exits_1(tmp_path, mail):
    del mail["message"]
    bad = _write(tmp_path, mail, "bad.json")
    result = runner.invoke(app, ["hash", str(bad), "--account", ACCOUNT])
    assert result.exit_code == 1
    assert "error:" in result.output


def test_max_depth_option(mail_file):
    result = runner.invoke(app, ["--max-depth", "1", "hash", str(mail_file), "-a", ACCOUNT])
    assert result.exit_code == 1


def test_main_returns_exit_code(tmp_path, mail_file, mail):
    assert main(["revision", str(mail_file)]) == 0
    del mail["types"]
    bad = _write(tmp_path, mail, "bad.json")
    assert main(["revision", str(bad)]) == 1
    assert main(["revision", str(tmp_path / "missing.json")]) == 1
