"""Interactive management of appointments and their reports."""

from __future__ import annotations

from datetime import date, time, timedelta
from typing import Callable, Iterable, List, Optional, Tuple

from .models import Especialidad, EstadoTurno, Medico, Turno
from .storage import EspecialidadArchivo, MedicoArchivo, PacienteArchivo, TurnoArchivo

SEPARADOR = "----------------------------------"

_VIGENTES = (EstadoTurno.ACTIVO, EstadoTurno.REPROGRAMADO)


def _pause_and_clear() -> None:
    input("Presione Enter para continuar...")
    print("\033[2J\033[H", end="", flush=True)


def start_of_week(day: date) -> date:
    """Return the Monday of the week that holds ``day``."""
    return day - timedelta(days=day.weekday())


def count_by_especialidad(
    turnos: Iterable[Turno], especialidades: Iterable[Especialidad]
) -> List[Tuple[Especialidad, int]]:
    """Count active or rescheduled appointments per specialty, in specialty order."""
    especialidades = list(especialidades)
    counts = [0] * len(especialidades)
    for turno in turnos:
        if turno.estado not in _VIGENTES:
            continue
        for index, especialidad in enumerate(especialidades):
            if especialidad.id_especialidad == turno.id_especialidad:
                counts[index] += 1
                break
    return list(zip(especialidades, counts))


def count_no_asistidos(
    turnos: Iterable[Turno], medicos: Iterable[Medico]
) -> List[Tuple[Medico, int]]:
    """Count missed appointments per doctor, in doctor order."""
    medicos = list(medicos)
    counts = [0] * len(medicos)
    for turno in turnos:
        if turno.estado != EstadoTurno.NO_ASISTIDO:
            continue
        for index, medico in enumerate(medicos):
            if medico.id_medico == turno.id_medico:
                counts[index] += 1
                break
    return list(zip(medicos, counts))


class TurnoManager:
    """Books, changes, lists and reports appointments through a console."""

    def __init__(
        self,
        archivo: Optional[TurnoArchivo] = None,
        *,
        pacientes: Optional[PacienteArchivo] = None,
        medicos: Optional[MedicoArchivo] = None,
        especialidades: Optional[EspecialidadArchivo] = None,
        ask: Callable[[str], str] = input,
        out: Callable[[str], None] = print,
        pause: Callable[[], None] = _pause_and_clear,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.archivo = archivo if archivo is not None else TurnoArchivo()
        self.pacientes = pacientes if pacientes is not None else PacienteArchivo()
        self.medicos = medicos if medicos is not None else MedicoArchivo()
        self.especialidades = (
            especialidades if especialidades is not None else EspecialidadArchivo()
        )
        self.ask = ask
        self.out = out
        self.pause = pause
        self.today = today

    def _ask_int(self, prompt: str) -> int:
        while True:
            answer = self.ask(prompt)
            try:
                return int(answer.strip())
            except ValueError:
                self.out("Ingrese un numero valido.")

    def _ask_valid_id(self, prompt: str, is_valid: Callable[[int], bool]) -> int:
        while True:
            value = self._ask_int(prompt)
            if is_valid(value):
                return value
            self.out("ID invalido o dado de baja. Intentar de nuevo")

    def _ask_date(self, header: str) -> date:
        self.out(header)
        while True:
            dia = self._ask_int("Dia: ")
            mes = self._ask_int("Mes: ")
            anio = self._ask_int("Anio: ")
            try:
                return date(anio, mes, dia)
            except ValueError:
                self.out("Fecha invalida.")

    def _ask_time(self, header: str) -> time:
        self.out(header)
        while True:
            hora = self._ask_int("Hora: ")
            minutos = self._ask_int("Minutos: ")
            try:
                return time(hora, minutos)
            except ValueError:
                self.out("Hora invalida.")

    def _ask_free_slot(
        self, id_medico: int, fecha_header: str, hora_header: str
    ) -> Optional[Tuple[date, time]]:
        while True:
            fecha = self._ask_date(fecha_header)
            hora = self._ask_time(hora_header)
            if not self.archivo.has_conflict(id_medico, fecha, hora):
                return fecha, hora
            opcion = self.ask(
                "El medico ya tiene un turno registrado a esa fecha y hora. "
                "Intente otro horario (s/n): "
            ).strip()
            if opcion[:1] in ("n", "N"):
                self.out("Cancelando cargar de turno")
                return None

    def _list(self, turnos: Iterable[Turno], separators: int = 2) -> None:
        for turno in turnos:
            for _ in range(separators):
                self.out(SEPARADOR)
            self.out(turno.describe())
            self.out("")

    def cargar(self) -> Optional[Turno]:
        """Book a new appointment; None if the user gives up on a busy slot."""
        turno = Turno(id_turno=self.archivo.next_id())
        turno.id_paciente = self._ask_valid_id(
            "Ingrese el ID del paciente: ", self.pacientes.is_active
        )
        turno.id_medico = self._ask_valid_id(
            "Ingrese el ID del medico: ", self.medicos.is_active
        )
        slot = self._ask_free_slot(
            turno.id_medico, "Ingrese la fecha del turno: ", "Ingrese la hora del turno: "
        )
        if slot is None:
            return None
        turno.fecha, turno.hora = slot
        turno.id_especialidad = self._ask_valid_id(
            "Ingrese el ID de especialidad: ", self.especialidades.is_active
        )
        self.out("Estado del turno: Activo ")
        turno.estado = EstadoTurno.ACTIVO
        try:
            self.archivo.append(turno)
        except OSError:
            self.out("Error al guardar turno")
        else:
            self.out("Turno guardado correctamente")
        self.pause()
        return turno

    def mostrar(self) -> List[Turno]:
        """Print every stored appointment and return them."""
        turnos = self.archivo.read_all()
        if not turnos:
            self.out("No hay turnos cargados")
            return turnos
        self.out(f"-------LISTADO DE TURNOS({len(turnos)})-------")
        self._list(turnos)
        self.pause()
        return turnos

    def reprogramar(self) -> Optional[Turno]:
        """Move an active appointment to a new free slot and mark it rescheduled."""
        id_turno = self._ask_int(
            "Ingrese el ID del turno al que desea modificar la consulta: "
        )
        found = next(
            (
                (posicion, turno)
                for posicion, turno in enumerate(self.archivo.read_all())
                if turno.id_turno == id_turno and turno.estado == EstadoTurno.ACTIVO
            ),
            None,
        )
        if found is None:
            self.out("Turno no encontrado o no activo")
            self.pause()
            return None
        posicion, turno = found
        slot = self._ask_free_slot(
            turno.id_medico, "Ingrese nueva fecha: ", "Ingrese nueva hora: "
        )
        if slot is None:
            return None
        turno.fecha, turno.hora = slot
        turno.estado = EstadoTurno.REPROGRAMADO
        try:
            self.archivo.write_at(turno, posicion)
        except OSError:
            self.out("Error al reprogramar el turno")
        else:
            self.out("Turno reprogramado correctamente")
        self.pause()
        return turno

    def _change_state(
        self, prompt: str, nuevo: EstadoTurno, rejected: str, done: str, failed: str
    ) -> bool:
        id_turno = self._ask_int(prompt)
        posicion = self.archivo.find(id_turno)
        if posicion is None:
            self.out("No hay un turno con ese ID")
            return False
        turno = self.archivo.read(posicion)
        if turno.estado not in _VIGENTES:
            self.out(rejected)
            self.pause()
            return False
        turno.estado = nuevo
        try:
            self.archivo.write_at(turno, posicion)
        except OSError:
            self.out(failed)
            changed = False
        else:
            self.out(done)
            changed = True
        self.pause()
        return changed

    def cancelar(self) -> bool:
        """Cancel an active or rescheduled appointment; True if it changed."""
        return self._change_state(
            "Ingrese el ID del turno que desea cancelar: ",
            EstadoTurno.CANCELADO,
            "Turno ya cancelado",
            "El turno fue cancelado correctamente",
            "Error al cancelar el turno",
        )

    def marcar_no_asistido(self) -> bool:
        """Mark an active or rescheduled appointment as missed; True if it changed."""
        return self._change_state(
            "Ingrese el ID del turno: ",
            EstadoTurno.NO_ASISTIDO,
            "No se puede marcar como turno no asistido",
            "El turno marcado como 'no asistido' correctamente",
            "Error al guardar el cambio",
        )

    def buscar_por_estado(self) -> List[Turno]:
        """Ask for a state code and print the appointments in that state."""
        estado = self._ask_int(
            "Indique el estado de turnos que desee buscar "
            "(1.Activo - 2.Cancelado - 3.Reprogramado - 4.No Asistido): "
        )
        turnos = [t for t in self.archivo.read_all() if t.estado == estado]
        if not turnos:
            self.out("No se encontraron turnos con ese estado")
        else:
            self.out(f"-------LISTADO DE TURNOS({len(turnos)})-------")
            self._list(turnos)
        self.pause()
        return turnos

    def turnos_del_dia(self) -> List[Turno]:
        """Print today's active appointments."""
        if not self.archivo.path.exists():
            self.out("No se pudieron leer los turnos")
            self.pause()
            return []
        hoy = self.today()
        self.out("")
        self.out("-------LISTADO DE TURNOS DEL DIA-------")
        self.out(f"---------------{hoy.strftime('%d/%m/%Y')}---------------")
        turnos = [
            t
            for t in self.archivo.read_all()
            if t.fecha == hoy and t.estado == EstadoTurno.ACTIVO
        ]
        for turno in turnos:
            self.out("---------------------------------------")
            self.out(turno.describe())
            self.out("")
        self.pause()
        return turnos

    def turnos_de_la_semana(self) -> List[Turno]:
        """Print this week's active appointments, within the week's starting month."""
        todos = self.archivo.read_all()
        if not todos:
            self.out("No hay turnos cargados.")
            return []
        inicio = start_of_week(self.today())
        self.out("\n------- LISTADO DE TURNOS DE LA SEMANA -------")
        self.out(f"----------------- {inicio.strftime('%d/%m/%Y')} ------------------")
        turnos = [
            t
            for t in todos
            if t.estado == EstadoTurno.ACTIVO
            and t.fecha is not None
            and t.fecha.year == inicio.year
            and t.fecha.month == inicio.month
            and inicio.day <= t.fecha.day <= inicio.day + 6
        ]
        for turno in turnos:
            self.out("----------------------------------------------")
            self.out(turno.describe())
            self.out("")
        self.pause()
        return turnos

    def cantidad_por_especialidad(self) -> List[Tuple[Especialidad, int]]:
        """Print how many current appointments each specialty has."""
        resultado = count_by_especialidad(
            self.archivo.read_all(), self.especialidades.read_all()
        )
        for especialidad, cantidad in resultado:
            self.out(f"{especialidad.nombre}: {cantidad} turnos")
        self.pause()
        return resultado

    def cantidad_no_asistidos(self) -> List[Tuple[Medico, int]]:
        """Print how many missed appointments each doctor has."""
        resultado = count_no_asistidos(self.archivo.read_all(), self.medicos.read_all())
        self.out("Cantidad de turnos no asistidos por medico")
        for medico, cantidad in resultado:
            self.out(f"{medico.nombre}: {cantidad}")
        self.pause()
        return resultado