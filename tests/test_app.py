import io
import sys

import pytest

from consultorio.app import main
from consultorio.models import Especialidad
from consultorio.storage import EspecialidadArchivo

DOWN = "\x1b[B"


def test_leaves_from_last_option(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(DOWN * 3 + "\n"))
    assert main(["--data-dir", str(tmp_path)]) == 0
    assert " SISTEMA DE GESTION DE TURNOS " in capsys.readouterr().out


def test_end_of_input_ends_cleanly(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    assert main(["--data-dir", str(tmp_path)]) == 0


def test_admin_lists_stored_specialties(tmp_path, monkeypatch, capsys):
    EspecialidadArchivo(tmp_path / "especialidad.dat").append(
        Especialidad(1, "Cardiologia", True)
    )
    script = "\n" + DOWN * 5 + "\n" + "\n" + DOWN * 3 + "\n" + DOWN * 3 + "\n"
    monkeypatch.setattr(sys, "stdin", io.StringIO(script))
    assert main(["--data-dir", str(tmp_path)]) == 0
    output = capsys.readouterr().out
    assert " MENU ADMINISTRADOR " in output
    assert "Nombre de la especialidad: Cardiologia" in output


def test_creates_data_directory(tmp_path, monkeypatch):
    target = tmp_path / "datos"
    monkeypatch.setattr(sys, "stdin", io.StringIO(DOWN * 3 + "\n"))
    assert main(["--data-dir", str(target)]) == 0
    assert target.is_dir()


def test_unknown_option_is_rejected():
    with pytest.raises(SystemExit) as excinfo:
        main(["--no-such-option"])
    assert excinfo.value.code == 2