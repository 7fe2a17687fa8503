import pytest

from consultorio.especialidades import EspecialidadManager
from consultorio.models import Especialidad
from consultorio.storage import EspecialidadArchivo


class Console:
    def __init__(self, *answers):
        self.answers = list(answers)
        self.prompts = []
        self.lines = []
        self.pauses = 0

    def ask(self, prompt):
        self.prompts.append(prompt)
        return self.answers.pop(0)

    def out(self, text=""):
        self.lines.append(str(text))

    def pause(self):
        self.pauses += 1


@pytest.fixture
def archivo(tmp_path):
    return EspecialidadArchivo(tmp_path / "especialidad.dat")


def make(archivo, console):
    return EspecialidadManager(
        archivo, ask=console.ask, out=console.out, pause=console.pause
    )


def test_cargar_stores_active_specialty(archivo):
    console = Console("Cardiologia", "s")
    registro = make(archivo, console).cargar()
    stored = archivo.read(0)
    assert stored == registro
    assert stored.nombre == "Cardiologia"
    assert stored.estado is True
    assert stored.id_especialidad == 1
    assert "Especialidad cargada correctamente." in console.lines
    assert console.pauses == 1


def test_cargar_inactive_and_ids_increase(archivo):
    make(archivo, Console("Pediatria", "s")).cargar()
    second = make(archivo, Console("Clinica", "n")).cargar()
    assert second.id_especialidad == archivo.count()
    assert archivo.read(1).estado is False


def test_mostrar_lists_states(archivo):
    archivo.append(Especialidad(1, "Cardiologia", True))
    archivo.append(Especialidad(2, "Pediatria", False))
    console = Console()
    shown = make(archivo, console).mostrar()
    assert [e.nombre for e in shown] == ["Cardiologia", "Pediatria"]
    assert "Estado de la especialidad: Activo" in console.lines
    assert "Estado de la especialidad: Inactivo" in console.lines
    assert "Nombre de la especialidad: Pediatria" in console.lines


def test_dar_baja_deactivates_once(archivo):
    archivo.append(Especialidad(1, "Cardiologia", True))
    console = Console("1")
    assert make(archivo, console).dar_baja() is True
    assert archivo.is_active(1) is False
    assert "Especialidad dada de baja correctamente" in console.lines

    again = Console("1")
    assert make(archivo, again).dar_baja() is False
    assert "Especialidad ya dada de baja" in again.lines


def test_dar_baja_unknown_id(archivo):
    archivo.append(Especialidad(1, "Cardiologia", True))
    console = Console("7")
    assert make(archivo, console).dar_baja() is False
    assert console.lines == ["Especialidad no encontrada"]
    assert console.pauses == 0


def test_dar_baja_reprompts_on_invalid_number(archivo):
    archivo.append(Especialidad(1, "Cardiologia", True))
    console = Console("abc", "1")
    assert make(archivo, console).dar_baja() is True
    assert len(console.prompts) == 2