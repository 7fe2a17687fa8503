"""Interactive management of doctors."""

from __future__ import annotations

from datetime import date
from typing import Callable, List, Optional

from .models import Domicilio, Medico
from .storage import MedicoArchivo

SEPARADOR = "----------------------------------"


def _pause_and_clear() -> None:
    input("Presione Enter para continuar...")
    print("\033[2J\033[H", end="", flush=True)


def _format_date(value: Optional[date]) -> str:
    return value.strftime("%d/%m/%Y") if value else ""


class MedicoManager:
    """Loads, lists and searches doctors through a console."""

    def __init__(
        self,
        archivo: Optional[MedicoArchivo] = None,
        *,
        ask: Callable[[str], str] = input,
        out: Callable[[str], None] = print,
        pause: Callable[[], None] = _pause_and_clear,
    ) -> None:
        self.archivo = archivo if archivo is not None else MedicoArchivo()
        self.ask = ask
        self.out = out
        self.pause = pause

    def _ask_int(self, prompt: str) -> int:
        while True:
            answer = self.ask(prompt)
            try:
                return int(answer.strip())
            except ValueError:
                self.out("Ingrese un numero valido.")

    def _ask_date(self) -> date:
        while True:
            dia = self._ask_int("Dia: ")
            mes = self._ask_int("Mes: ")
            anio = self._ask_int("Anio: ")
            try:
                return date(anio, mes, dia)
            except ValueError:
                self.out("Fecha invalida.")

    def cargar(self) -> Medico:
        """Ask for a new doctor's data and append it to the file."""
        self.out("INGRESO DE UN NUEVO MEDICO")
        self.out("---------------------------")
        medico = Medico()
        medico.apellido = self.ask("Apellido: ")
        medico.nombre = self.ask("Nombre: ")
        medico.dni = self._ask_int("DNI: ")
        self.out("Fecha de nacimiento")
        medico.fecha_nacimiento = self._ask_date()
        medico.genero = self.ask("Genero: ")
        medico.email = self.ask("Email: ")
        medico.telefono = self.ask("Telefono: ")

        self.out("Domicilio:")
        domicilio = Domicilio()
        domicilio.calle = self.ask("Calle: ")
        domicilio.altura = self._ask_int("Altura: ")
        domicilio.localidad = self.ask("Localidad: ")
        domicilio.provincia = self.ask("Provincia: ")
        domicilio.codigo_postal = self.ask("Codigo postal: ")
        medico.domicilio = domicilio

        medico.id_medico = self.archivo.next_id()
        self.out(f"ID asignado: {medico.id_medico}")
        medico.matricula = self._ask_int("Matricula: ")
        medico.id_especialidad = self._ask_int("ID de Especialidad: ")
        medico.estado = True

        try:
            self.archivo.append(medico)
        except OSError:
            self.out("Error al guardar medico.")
        else:
            self.out("Medico guardado correctamente.")
        self.pause()
        return medico

    def mostrar(self) -> List[Medico]:
        """Print every stored doctor and return them."""
        medicos = self.archivo.read_all()
        if not medicos:
            self.out("No hay medicos cargados.")
            return medicos
        self.out("------- LISTADO DE MEDICOS -------")
        for medico in medicos:
            self.out(SEPARADOR)
            self.out(f"Apellido: {medico.apellido}")
            self.out(f"Nombre: {medico.nombre}")
            self.out(f"DNI: {medico.dni}")
            self.out(f"Fecha de nacimiento: {_format_date(medico.fecha_nacimiento)}")
            self.out(f"Genero: {medico.genero}")
            self.out(f"Email: {medico.email}")
            self.out(f"Telefono: {medico.telefono}")
            self.out("Domicilio:")
            self.out(medico.domicilio.describe())
            self.out(f"ID Medico: {medico.id_medico}")
            self.out(f"Matricula: {medico.matricula}")
            self.out(f"ID Especialidad: {medico.id_especialidad}")
            self.out(f"Estado: {'Activo' if medico.estado else 'Inactivo'}")
            self.out(SEPARADOR)
        self.pause()
        return medicos

    def buscar_por_especialidad(self) -> List[Medico]:
        """Ask for a specialty id and print the active doctors that have it."""
        id_especialidad = self._ask_int(
            "Ingrese el ID de especialidad que desea buscar: "
        )
        medicos = self.archivo.read_all()
        if not medicos:
            self.out("No hay medicos cargados.")
            return []
        self.out(f"\n--- Medicos con ID de especialidad {id_especialidad} ---")
        encontrados = [
            medico
            for medico in medicos
            if medico.id_especialidad == id_especialidad and medico.estado
        ]
        for medico in encontrados:
            self.out(SEPARADOR)
            self.out(f"ID Medico: {medico.id_medico}")
            self.out(f"Nombre: {medico.nombre} {medico.apellido}")
            self.out(f"DNI: {medico.dni}")
            self.out(f"Email: {medico.email}")
            self.out(f"Telefono: {medico.telefono}")
        if not encontrados:
            self.out("No se encontraron medicos activos con esa especialidad.")
        self.pause()
        return encontrados