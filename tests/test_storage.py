from datetime import date, time

import pytest

from consultorio.models import (
    Domicilio,
    Especialidad,
    EstadoTurno,
    Medico,
    Paciente,
    Turno,
)
from consultorio.storage import (
    EspecialidadArchivo,
    MedicoArchivo,
    PacienteArchivo,
    TurnoArchivo,
)


@pytest.fixture
def especialidades(tmp_path):
    return EspecialidadArchivo(tmp_path / "especialidad.dat")


@pytest.fixture
def turnos(tmp_path):
    return TurnoArchivo(tmp_path / "Turnos.dat")


def _medico(id_medico=1, estado=True):
    return Medico(
        apellido="Gomez",
        nombre="Ana",
        dni=30123456,
        fecha_nacimiento=date(1980, 5, 17),
        genero="F",
        email="ana@example.com",
        telefono="111",
        domicilio=Domicilio("Rivadavia", 1200, "Moron", "Buenos Aires", "1708"),
        id_medico=id_medico,
        matricula=4321,
        id_especialidad=2,
        estado=estado,
    )


def _turno(id_turno, id_medico=1, fecha=date(2024, 3, 4), hora=time(10, 30), estado=1):
    return Turno(
        id_turno=id_turno,
        id_paciente=7,
        id_medico=id_medico,
        fecha=fecha,
        hora=hora,
        id_especialidad=2,
        estado=estado,
    )


def test_missing_file_behaviour(especialidades):
    assert especialidades.count() == 0
    assert especialidades.next_id() == 1
    assert especialidades.find(1) is None
    assert especialidades.read_all() == []
    assert especialidades.read(0) == Especialidad()
    assert especialidades.is_active(1) is False


def test_append_and_read_round_trip(especialidades):
    first = Especialidad(1, "Cardiologia", True)
    second = Especialidad(2, "Pediatría", False)
    especialidades.append(first)
    especialidades.append(second)
    assert especialidades.count() == 2
    assert especialidades.next_id() == 3
    assert especialidades.read(0) == first
    assert especialidades.read(1) == second
    assert especialidades.read_all() == [first, second]


def test_file_size_is_whole_records(especialidades):
    especialidades.append(Especialidad(1, "A", True))
    especialidades.append(Especialidad(2, "B", True))
    assert especialidades.path.stat().st_size == 2 * especialidades.record_size


def test_find_returns_position(especialidades):
    for ident in (5, 9, 11):
        especialidades.append(Especialidad(ident, f"E{ident}", True))
    assert especialidades.find(9) == 1
    assert especialidades.find(11) == 2
    assert especialidades.find(4) is None


def test_write_at_overwrites(especialidades):
    especialidades.append(Especialidad(1, "Clinica", True))
    especialidades.append(Especialidad(2, "Traumatologia", True))
    especialidades.write_at(Especialidad(2, "Traumatologia", False), 1)
    assert especialidades.count() == 2
    assert especialidades.read(1).estado is False
    assert especialidades.read(0).nombre == "Clinica"


def test_write_at_missing_file_raises(especialidades):
    with pytest.raises(FileNotFoundError):
        especialidades.write_at(Especialidad(1, "X", True), 0)


def test_negative_position_raises(especialidades):
    especialidades.append(Especialidad(1, "X", True))
    with pytest.raises(ValueError):
        especialidades.read(-1)
    with pytest.raises(ValueError):
        especialidades.write_at(Especialidad(1, "Y", True), -1)


def test_read_past_end_gives_empty_record(especialidades):
    especialidades.append(Especialidad(1, "X", True))
    assert especialidades.read(3) == Especialidad()


def test_is_active_follows_estado(especialidades):
    especialidades.append(Especialidad(1, "Activa", True))
    especialidades.append(Especialidad(2, "Baja", False))
    assert especialidades.is_active(1) is True
    assert especialidades.is_active(2) is False
    assert especialidades.is_active(3) is False


def test_unencodable_characters_replaced(especialidades):
    especialidades.append(Especialidad(1, "Ωmega", True))
    assert especialidades.read(0).nombre == "?mega"


def test_medico_round_trip(tmp_path):
    archivo = MedicoArchivo(tmp_path / "Medicos.dat")
    medico = _medico()
    archivo.append(medico)
    archivo.append(_medico(2, estado=False))
    assert archivo.read(0) == medico
    assert archivo.find(2) == 1
    assert archivo.is_active(1) is True
    assert archivo.is_active(2) is False


def test_paciente_round_trip(tmp_path):
    archivo = PacienteArchivo(tmp_path / "Pacientes.dat")
    paciente = Paciente(
        apellido="Lopez",
        nombre="Juan",
        dni=25111222,
        fecha_nacimiento=None,
        genero="M",
        email="juan@example.com",
        telefono="222",
        domicilio=Domicilio("Mitre", 50, "Quilmes", "Buenos Aires", "1878"),
        id_paciente=3,
        carnet=998,
        estado=True,
    )
    archivo.append(paciente)
    assert archivo.read_all() == [paciente]
    assert archivo.next_id() == 2
    assert archivo.is_active(3) is True


def test_turno_round_trip(turnos):
    turno = _turno(1, hora=time(0, 0))
    sin_hora = _turno(2, fecha=None, hora=None, estado=4)
    turnos.append(turno)
    turnos.append(sin_hora)
    assert turnos.read(0) == turno
    assert turnos.read(1) == sin_hora
    assert turnos.read(1).estado is EstadoTurno.NO_ASISTIDO


def test_turno_is_active_only_when_activo(turnos):
    turnos.append(_turno(1, estado=1))
    turnos.append(_turno(2, estado=3))
    assert turnos.is_active(1) is True
    assert turnos.is_active(2) is False


def test_has_conflict(turnos):
    turnos.append(_turno(1, id_medico=1, estado=1))
    turnos.append(_turno(2, id_medico=2, hora=time(11, 0), estado=2))
    assert turnos.has_conflict(1, date(2024, 3, 4), time(10, 30)) is True
    assert turnos.has_conflict(1, date(2024, 3, 4), time(11, 0)) is False
    assert turnos.has_conflict(1, date(2024, 3, 5), time(10, 30)) is False
    assert turnos.has_conflict(2, date(2024, 3, 4), time(11, 0)) is False


def test_has_conflict_missing_file(turnos):
    assert turnos.has_conflict(1, date(2024, 3, 4), time(10, 30)) is False