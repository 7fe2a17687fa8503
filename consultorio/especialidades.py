"""Interactive management of medical specialties."""

from __future__ import annotations

from typing import Callable, List, Optional

from .models import Especialidad
from .storage import EspecialidadArchivo

SEPARADOR = "----------------------------------------------"


def _pause_and_clear() -> None:
    input("Presione Enter para continuar...")
    print("\033[2J\033[H", end="", flush=True)


class EspecialidadManager:
    """Loads, lists and deactivates specialties through a console."""

    def __init__(
        self,
        archivo: Optional[EspecialidadArchivo] = None,
        *,
        ask: Callable[[str], str] = input,
        out: Callable[[str], None] = print,
        pause: Callable[[], None] = _pause_and_clear,
    ) -> None:
        self.archivo = archivo if archivo is not None else EspecialidadArchivo()
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

    def cargar(self) -> Especialidad:
        """Ask for a new specialty and append it to the file."""
        id_especialidad = self.archivo.next_id()
        self.out(f"ID: {id_especialidad}")
        nombre = self.ask("Ingrese nombre de la especialidad: ")
        respuesta = self.ask("La especialidad esta activa? (s/n): ").strip()
        estado = respuesta[:1] in ("s", "S")
        registro = Especialidad(id_especialidad, nombre, estado)
        try:
            self.archivo.append(registro)
        except OSError:
            self.out("No se pudo guardar la especialidad.")
        else:
            self.out("Especialidad cargada correctamente.")
        self.pause()
        return registro

    def mostrar(self) -> List[Especialidad]:
        """Print every stored specialty and return them."""
        especialidades = self.archivo.read_all()
        for especialidad in especialidades:
            self.out(SEPARADOR)
            self.out(f"ID de la especialidad: {especialidad.id_especialidad}")
            self.out(f"Nombre de la especialidad: {especialidad.nombre}")
            estado = "Activo" if especialidad.estado else "Inactivo"
            self.out(f"Estado de la especialidad: {estado}")
        self.pause()
        return especialidades

    def dar_baja(self) -> bool:
        """Ask for a specialty id and mark it inactive; True if it was changed."""
        id_especialidad = self._ask_int(
            "Ingrese el ID de la especialidad a dar de baja: "
        )
        posicion = self.archivo.find(id_especialidad)
        if posicion is None:
            self.out("Especialidad no encontrada")
            return False
        especialidad = self.archivo.read(posicion)
        if not especialidad.estado:
            self.out("Especialidad ya dada de baja")
            return False
        especialidad.estado = False
        try:
            self.archivo.write_at(especialidad, posicion)
        except OSError:
            self.out("No se pudo modificar el archivo")
            changed = False
        else:
            self.out("Especialidad dada de baja correctamente")
            changed = True
        self.pause()
        return changed