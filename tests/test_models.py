from datetime import date, time

import pytest

from consultorio.models import (
    Domicilio,
    Especialidad,
    EstadoTurno,
    Medico,
    Paciente,
    Persona,
    Turno,
)


def test_especialidad_defaults():
    esp = Especialidad()
    assert (esp.id_especialidad, esp.nombre, esp.estado) == (0, "", True)


def test_especialidad_name_limit_keeps_previous():
    esp = Especialidad(3, "Cardiologia", True)
    esp.nombre = "x" * 50
    assert esp.nombre == "Cardiologia"
    esp.nombre = "y" * 49
    assert esp.nombre == "y" * 49


def test_especialidad_too_long_name_at_creation_is_empty():
    assert Especialidad(1, "z" * 60, False).nombre == ""


def test_persona_dni_range():
    persona = Persona(dni=1000000)
    assert persona.dni == 0
    persona.dni = 30111222
    assert persona.dni == 30111222
    persona.dni = 99999999
    assert persona.dni == 30111222


def test_persona_keeps_text_when_too_long():
    persona = Persona(apellido="Gomez")
    persona.apellido = "a" * 200
    assert persona.apellido == "Gomez"


def test_medico_resets_invalid_values_to_zero():
    medico = Medico(id_medico=5, matricula=999999, id_especialidad=2)
    assert (medico.id_medico, medico.matricula, medico.id_especialidad) == (5, 999999, 2)
    medico.matricula = 1000000
    medico.id_medico = -1
    medico.id_especialidad = 0
    assert (medico.id_medico, medico.matricula, medico.id_especialidad) == (0, 0, 0)


def test_medico_inherits_persona_rules():
    medico = Medico("Perez", "Ana", 25000000)
    medico.dni = 5
    assert medico.dni == 25000000
    assert medico.estado is True


def test_paciente_keeps_previous_on_invalid():
    paciente = Paciente(id_paciente=4, carnet=77)
    paciente.id_paciente = 0
    paciente.carnet = -3
    assert (paciente.id_paciente, paciente.carnet) == (4, 77)


def test_paciente_invalid_at_creation_is_zero():
    paciente = Paciente(id_paciente=-2, carnet=0)
    assert (paciente.id_paciente, paciente.carnet) == (0, 0)


def test_domicilio_postal_code_limit():
    dom = Domicilio("Mitre", 100, "Tigre", "Buenos Aires", "1648")
    dom.codigo_postal = "123456"
    assert dom.codigo_postal == "1648"


def test_domicilio_describe_contains_fields():
    dom = Domicilio("Mitre", 100, "Tigre", "Buenos Aires", "1648")
    text = dom.describe()
    for part in ("Mitre", "100", "Tigre", "Buenos Aires", "1648"):
        assert part in text


@pytest.mark.parametrize(
    "estado, label",
    [
        (EstadoTurno.ACTIVO, "Activo"),
        (EstadoTurno.CANCELADO, "Cancelado"),
        (EstadoTurno.REPROGRAMADO, "Reprogramado"),
        (EstadoTurno.NO_ASISTIDO, "No asistido"),
        (EstadoTurno.DESCONOCIDO, "Desconocido"),
    ],
)
def test_estado_labels(estado, label):
    assert estado.label() == label


def test_estado_unknown_code_maps_to_desconocido():
    assert EstadoTurno(9) is EstadoTurno.DESCONOCIDO
    assert EstadoTurno(2) is EstadoTurno.CANCELADO


def test_turno_coerces_int_estado():
    turno = Turno(1, 2, 3, date(2024, 5, 6), time(9, 30), 4, 3)
    assert turno.estado is EstadoTurno.REPROGRAMADO
    turno.estado = 2
    assert turno.estado is EstadoTurno.CANCELADO


def test_turno_default_is_desconocido():
    assert Turno().estado is EstadoTurno.DESCONOCIDO
    assert "Desconocido" in Turno().describe()


def test_turno_describe():
    turno = Turno(7, 2, 3, date(2024, 5, 6), time(9, 30), 4, EstadoTurno.ACTIVO)
    lines = turno.describe().splitlines()
    assert lines[0] == "ID Turno: 7"
    assert lines[-1] == "Estado del turno: Activo"
    assert "ID Especialidad: 4" in lines
    assert len(lines) == 7


def test_turno_equality_round_trip():
    a = Turno(1, 2, 3, date(2024, 1, 2), time(8, 0), 1, 1)
    b = Turno(1, 2, 3, date(2024, 1, 2), time(8, 0), 1, EstadoTurno.ACTIVO)
    assert a == b