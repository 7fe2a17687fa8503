"""Fixed-size binary record files for specialties, doctors, patients and appointments."""

from __future__ import annotations

import struct
from datetime import date, time
from pathlib import Path
from typing import ClassVar, Generic, Iterator, List, Optional, Tuple, TypeVar, Union

from .models import (
    Domicilio,
    Especialidad,
    EstadoTurno,
    Medico,
    Paciente,
    Turno,
)

R = TypeVar("R")

_ENCODING = "latin-1"

_DOMICILIO_FMT = "30si30s30s6s"
_PERSONA_FMT = "50s50siHBB20s50s20s" + _DOMICILIO_FMT
_PERSONA_FIELDS = 14


def _text(value: str, size: int) -> bytes:
    """Encode a string into a NUL-terminated field of ``size`` bytes."""
    return value.encode(_ENCODING, "replace")[: size - 1]


def _string(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode(_ENCODING)


def _pack_date(value: Optional[date]) -> Tuple[int, int, int]:
    if value is None:
        return (0, 0, 0)
    return (value.year, value.month, value.day)


def _unpack_date(year: int, month: int, day: int) -> Optional[date]:
    if year == 0:
        return None
    return date(year, month, day)


def _pack_time(value: Optional[time]) -> Tuple[int, int, int]:
    if value is None:
        return (-1, 0, 0)
    return (value.hour, value.minute, value.second)


def _unpack_time(hour: int, minute: int, second: int) -> Optional[time]:
    if hour < 0:
        return None
    return time(hour, minute, second)


def _pack_domicilio(domicilio: Domicilio) -> tuple:
    return (
        _text(domicilio.calle, 30),
        domicilio.altura,
        _text(domicilio.localidad, 30),
        _text(domicilio.provincia, 30),
        _text(domicilio.codigo_postal, 6),
    )


def _unpack_domicilio(values: tuple) -> Domicilio:
    calle, altura, localidad, provincia, codigo_postal = values
    return Domicilio(
        calle=_string(calle),
        altura=altura,
        localidad=_string(localidad),
        provincia=_string(provincia),
        codigo_postal=_string(codigo_postal),
    )


def _pack_persona(persona) -> tuple:
    return (
        _text(persona.apellido, 50),
        _text(persona.nombre, 50),
        persona.dni,
        *_pack_date(persona.fecha_nacimiento),
        _text(persona.genero, 20),
        _text(persona.email, 50),
        _text(persona.telefono, 20),
        *_pack_domicilio(persona.domicilio),
    )


def _unpack_persona(values: tuple) -> dict:
    apellido, nombre, dni, year, month, day, genero, email, telefono = values[:9]
    return {
        "apellido": _string(apellido),
        "nombre": _string(nombre),
        "dni": dni,
        "fecha_nacimiento": _unpack_date(year, month, day),
        "genero": _string(genero),
        "email": _string(email),
        "telefono": _string(telefono),
        "domicilio": _unpack_domicilio(values[9:_PERSONA_FIELDS]),
    }


class RecordFile(Generic[R]):
    """A file of fixed-size records addressed by position.

    Subclasses define the record layout and how to reach a record's id and
    active flag.
    """

    default_filename: ClassVar[str] = "records.dat"
    _layout: ClassVar[struct.Struct]

    def __init__(self, path: Union[str, Path, None] = None) -> None:
        self.path = Path(path) if path is not None else Path(self.default_filename)

    # Record layout hooks.
    def _pack(self, record: R) -> bytes:
        raise NotImplementedError

    def _unpack(self, data: bytes) -> R:
        raise NotImplementedError

    def _empty(self) -> R:
        raise NotImplementedError

    def _record_id(self, record: R) -> int:
        raise NotImplementedError

    def _is_record_active(self, record: R) -> bool:
        return bool(getattr(record, "estado"))

    @property
    def record_size(self) -> int:
        """Size in bytes of one stored record."""
        return self._layout.size

    def _records(self) -> Iterator[R]:
        try:
            handle = self.path.open("rb")
        except FileNotFoundError:
            return
        with handle:
            while True:
                data = handle.read(self.record_size)
                if len(data) < self.record_size:
                    return
                yield self._unpack(data)

    def append(self, record: R) -> None:
        """Add a record at the end of the file, creating it if needed."""
        with self.path.open("ab") as handle:
            handle.write(self._pack(record))

    def write_at(self, record: R, position: int) -> None:
        """Overwrite the record at ``position``; the file must already exist."""
        if position < 0:
            raise ValueError(f"negative record position: {position}")
        with self.path.open("r+b") as handle:
            handle.seek(self.record_size * position)
            handle.write(self._pack(record))

    def find(self, record_id: int) -> Optional[int]:
        """Return the position of the first record with this id, or None."""
        for position, record in enumerate(self._records()):
            if self._record_id(record) == record_id:
                return position
        return None

    def read(self, position: int) -> R:
        """Return the record at ``position``, or an empty record if there is none."""
        if position < 0:
            raise ValueError(f"negative record position: {position}")
        try:
            handle = self.path.open("rb")
        except FileNotFoundError:
            return self._empty()
        with handle:
            handle.seek(self.record_size * position)
            data = handle.read(self.record_size)
        if len(data) < self.record_size:
            return self._empty()
        return self._unpack(data)

    def read_all(self) -> List[R]:
        """Return every record in file order."""
        return list(self._records())

    def count(self) -> int:
        """Number of whole records stored in the file."""
        try:
            size = self.path.stat().st_size
        except FileNotFoundError:
            return 0
        return size // self.record_size

    def next_id(self) -> int:
        """Id to give the next record: one more than the number stored."""
        return self.count() + 1

    def is_active(self, record_id: int) -> bool:
        """Whether a record with this id exists and is active."""
        position = self.find(record_id)
        if position is None:
            return False
        return self._is_record_active(self.read(position))


class EspecialidadArchivo(RecordFile[Especialidad]):
    """File of medical specialties."""

    default_filename = "especialidad.dat"
    _layout = struct.Struct("<i50s?")

    def _pack(self, record: Especialidad) -> bytes:
        return self._layout.pack(
            record.id_especialidad, _text(record.nombre, 50), record.estado
        )

    def _unpack(self, data: bytes) -> Especialidad:
        id_especialidad, nombre, estado = self._layout.unpack(data)
        return Especialidad(
            id_especialidad=id_especialidad, nombre=_string(nombre), estado=estado
        )

    def _empty(self) -> Especialidad:
        return Especialidad()

    def _record_id(self, record: Especialidad) -> int:
        return record.id_especialidad


class MedicoArchivo(RecordFile[Medico]):
    """File of doctors."""

    default_filename = "Medicos.dat"
    _layout = struct.Struct("<" + _PERSONA_FMT + "iii?")

    def _pack(self, record: Medico) -> bytes:
        return self._layout.pack(
            *_pack_persona(record),
            record.id_medico,
            record.matricula,
            record.id_especialidad,
            record.estado,
        )

    def _unpack(self, data: bytes) -> Medico:
        values = self._layout.unpack(data)
        id_medico, matricula, id_especialidad, estado = values[_PERSONA_FIELDS:]
        return Medico(
            **_unpack_persona(values),
            id_medico=id_medico,
            matricula=matricula,
            id_especialidad=id_especialidad,
            estado=estado,
        )

    def _empty(self) -> Medico:
        return Medico()

    def _record_id(self, record: Medico) -> int:
        return record.id_medico


class PacienteArchivo(RecordFile[Paciente]):
    """File of patients."""

    default_filename = "Pacientes.dat"
    _layout = struct.Struct("<" + _PERSONA_FMT + "ii?")

    def _pack(self, record: Paciente) -> bytes:
        return self._layout.pack(
            *_pack_persona(record), record.id_paciente, record.carnet, record.estado
        )

    def _unpack(self, data: bytes) -> Paciente:
        values = self._layout.unpack(data)
        id_paciente, carnet, estado = values[_PERSONA_FIELDS:]
        return Paciente(
            **_unpack_persona(values),
            id_paciente=id_paciente,
            carnet=carnet,
            estado=estado,
        )

    def _empty(self) -> Paciente:
        return Paciente()

    def _record_id(self, record: Paciente) -> int:
        return record.id_paciente


class TurnoArchivo(RecordFile[Turno]):
    """File of appointments."""

    default_filename = "Turnos.dat"
    _layout = struct.Struct("<iiiHBBbbbib")

    def _pack(self, record: Turno) -> bytes:
        return self._layout.pack(
            record.id_turno,
            record.id_paciente,
            record.id_medico,
            *_pack_date(record.fecha),
            *_pack_time(record.hora),
            record.id_especialidad,
            int(record.estado),
        )

    def _unpack(self, data: bytes) -> Turno:
        (
            id_turno,
            id_paciente,
            id_medico,
            year,
            month,
            day,
            hour,
            minute,
            second,
            id_especialidad,
            estado,
        ) = self._layout.unpack(data)
        return Turno(
            id_turno=id_turno,
            id_paciente=id_paciente,
            id_medico=id_medico,
            fecha=_unpack_date(year, month, day),
            hora=_unpack_time(hour, minute, second),
            id_especialidad=id_especialidad,
            estado=estado,
        )

    def _empty(self) -> Turno:
        return Turno()

    def _record_id(self, record: Turno) -> int:
        return record.id_turno

    def _is_record_active(self, record: Turno) -> bool:
        return record.estado == EstadoTurno.ACTIVO

    def has_conflict(self, id_medico: int, fecha: date, hora: time) -> bool:
        """Whether the doctor already has an active appointment at that date and time."""
        return any(
            turno.id_medico == id_medico
            and turno.fecha == fecha
            and turno.hora == hora
            and turno.estado == EstadoTurno.ACTIVO
            for turno in self._records()
        )