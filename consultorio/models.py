"""Domain records of the clinic: addresses, specialties, people and appointments."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Callable, ClassVar, Dict, FrozenSet, Optional, Tuple

_Rule = Tuple[Callable[[Any], bool], Any]

CALLE_MAX = 29
LOCALIDAD_MAX = 29
PROVINCIA_MAX = 29
CODIGO_POSTAL_MAX = 5
ESPECIALIDAD_NOMBRE_MAX = 49
APELLIDO_MAX = 49
NOMBRE_MAX = 49
GENERO_MAX = 19
EMAIL_MAX = 49
TELEFONO_MAX = 19
MATRICULA_MAX = 999999


def _max_len(limit: int) -> _Rule:
    return (lambda value: len(value) <= limit, "")


def _positive() -> _Rule:
    return (lambda value: value > 0, 0)


class _Validated:
    """Applies per-field rules on every assignment.

    A rejected value leaves the field as it was; a field that has no value
    yet, or that is listed in ``_RESET_ON_REJECT``, gets the rule's fallback.
    """

    _RULES: ClassVar[Dict[str, _Rule]] = {}
    _RESET_ON_REJECT: ClassVar[FrozenSet[str]] = frozenset()

    def __setattr__(self, name: str, value: Any) -> None:
        rule = self._RULES.get(name)
        if rule is not None:
            accepts, fallback = rule
            if not accepts(value):
                if name in self.__dict__ and name not in self._RESET_ON_REJECT:
                    return
                value = fallback
        super().__setattr__(name, value)


@dataclass
class Domicilio(_Validated):
    """A postal address."""

    calle: str = ""
    altura: int = 0
    localidad: str = ""
    provincia: str = ""
    codigo_postal: str = ""

    _RULES = {
        "calle": _max_len(CALLE_MAX),
        "localidad": _max_len(LOCALIDAD_MAX),
        "provincia": _max_len(PROVINCIA_MAX),
        "codigo_postal": _max_len(CODIGO_POSTAL_MAX),
    }

    def describe(self) -> str:
        """Return the address as display lines."""
        return "\n".join(
            [
                f"Calle: {self.calle}",
                f"Altura: {self.altura}",
                f"Localidad: {self.localidad}",
                f"Provincia: {self.provincia}",
                f"Codigo postal: {self.codigo_postal}",
            ]
        )


@dataclass
class Especialidad(_Validated):
    """A medical specialty; ``estado`` tells whether it is active."""

    id_especialidad: int = 0
    nombre: str = ""
    estado: bool = True

    _RULES = {"nombre": _max_len(ESPECIALIDAD_NOMBRE_MAX)}


@dataclass
class Persona(_Validated):
    """Personal data shared by doctors and patients."""

    apellido: str = ""
    nombre: str = ""
    dni: int = 0
    fecha_nacimiento: Optional[date] = None
    genero: str = ""
    email: str = ""
    telefono: str = ""
    domicilio: Domicilio = field(default_factory=Domicilio)

    _RULES = {
        "apellido": _max_len(APELLIDO_MAX),
        "nombre": _max_len(NOMBRE_MAX),
        "dni": (lambda value: 1000000 < value < 99999999, 0),
        "genero": _max_len(GENERO_MAX),
        "email": _max_len(EMAIL_MAX),
        "telefono": _max_len(TELEFONO_MAX),
    }


@dataclass
class Medico(Persona):
    """A doctor; invalid numeric fields are reset to 0."""

    id_medico: int = 0
    matricula: int = 0
    id_especialidad: int = 0
    estado: bool = True

    _RULES = {
        **Persona._RULES,
        "id_medico": _positive(),
        "matricula": (lambda value: 1 <= value <= MATRICULA_MAX, 0),
        "id_especialidad": _positive(),
    }
    _RESET_ON_REJECT = frozenset({"id_medico", "matricula", "id_especialidad"})


@dataclass
class Paciente(Persona):
    """A patient; invalid id or card number leave the previous value."""

    id_paciente: int = 0
    carnet: int = 0
    estado: bool = True

    _RULES = {
        **Persona._RULES,
        "id_paciente": _positive(),
        "carnet": _positive(),
    }


class EstadoTurno(enum.IntEnum):
    """State of an appointment; unknown codes map to DESCONOCIDO."""

    DESCONOCIDO = 0
    ACTIVO = 1
    CANCELADO = 2
    REPROGRAMADO = 3
    NO_ASISTIDO = 4

    @classmethod
    def _missing_(cls, value: object) -> "EstadoTurno":
        return cls.DESCONOCIDO

    def label(self) -> str:
        """Human-readable name of the state."""
        return _LABELS[self]


_LABELS = {
    EstadoTurno.DESCONOCIDO: "Desconocido",
    EstadoTurno.ACTIVO: "Activo",
    EstadoTurno.CANCELADO: "Cancelado",
    EstadoTurno.REPROGRAMADO: "Reprogramado",
    EstadoTurno.NO_ASISTIDO: "No asistido",
}


@dataclass
class Turno:
    """An appointment of a patient with a doctor."""

    id_turno: int = 0
    id_paciente: int = 0
    id_medico: int = 0
    fecha: Optional[date] = None
    hora: Optional[time] = None
    id_especialidad: int = 0
    estado: EstadoTurno = EstadoTurno.DESCONOCIDO

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "estado":
            value = EstadoTurno(value)
        super().__setattr__(name, value)

    def describe(self) -> str:
        """Return the appointment as display lines."""
        fecha = self.fecha.strftime("%d/%m/%Y") if self.fecha else ""
        hora = self.hora.strftime("%H:%M") if self.hora else ""
        return "\n".join(
            [
                f"ID Turno: {self.id_turno}",
                f"ID Paciente: {self.id_paciente}",
                f"ID Medico: {self.id_medico}",
                f"Fecha del turno: {fecha}",
                f"Hora del turno: {hora}",
                f"ID Especialidad: {self.id_especialidad}",
                f"Estado del turno: {self.estado.label()}",
            ]
        )