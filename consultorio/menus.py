"""Keyboard-driven console menus for administrators, receptionists and doctors."""

from __future__ import annotations

import enum
import os
import sys
from typing import Any, Callable, List, Optional, Sequence, TextIO, Tuple

from .especialidades import EspecialidadManager
from .medicos import MedicoManager
from .turnos import TurnoManager

CLEAR_SCREEN = "\033[2J\033[3J\033[H"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
RESET_ATTRIBUTES = "\033[0m"
FG_WHITE = "\033[01;37m"
BG_BLACK = "\033[40m"
BG_BLUE = "\033[44m"
MARKER = "\u00bb"
FIRST_ROW = 5
TITLE_ROW = 3

Action = Optional[Callable[[], Any]]
Item = Tuple[str, Action]


class Key(enum.IntEnum):
    """Key codes returned by the key reader."""

    ESCAPE = 0
    ENTER = 1
    INSERT = 2
    HOME = 3
    PGUP = 4
    DELETE = 5
    END = 6
    PGDOWN = 7
    UP = 14
    DOWN = 15
    LEFT = 16
    RIGHT = 17
    SPACE = 32


_ANSI_ARROWS = {"A": Key.UP, "B": Key.DOWN, "C": Key.RIGHT, "D": Key.LEFT}

_WINDOWS_SCANCODES = {
    71: Key.HOME,
    72: Key.UP,
    73: Key.PGUP,
    75: Key.LEFT,
    77: Key.RIGHT,
    79: Key.END,
    80: Key.DOWN,
    81: Key.PGDOWN,
    82: Key.INSERT,
    83: Key.DELETE,
}


def locate(x: int, y: int) -> str:
    """Escape sequence that moves the cursor to the 1-based column x, row y."""
    return f"\033[{y};{x}H"


def _write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _decode(first: str, more: Callable[[], str]) -> int:
    if first == "":
        raise EOFError("no more keys")
    if first in ("\r", "\n"):
        return Key.ENTER
    if first == "\x1b":
        if more() == "[":
            return _ANSI_ARROWS.get(more(), Key.ESCAPE)
        return Key.ESCAPE
    return ord(first)


def _read_windows_key() -> int:
    import msvcrt

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        code = ord(msvcrt.getwch())
        return _WINDOWS_SCANCODES.get(code, code)
    if ch == "\x1b":
        return Key.ESCAPE
    return _decode(ch, lambda: "")


def _read_posix_key(stream: TextIO) -> int:
    import select
    import termios
    import tty

    fd = stream.fileno()
    saved = termios.tcgetattr(fd)

    def more() -> str:
        ready, _, _ = select.select([fd], [], [], 0.05)
        return os.read(fd, 1).decode("latin-1") if ready else ""

    try:
        tty.setcbreak(fd)
        return _decode(os.read(fd, 1).decode("latin-1"), more)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def _read_key(stream: Optional[TextIO] = None) -> int:
    """Block until a key is pressed and return its code."""
    stream = stream if stream is not None else sys.stdin
    if stream.isatty():
        if os.name == "nt":
            return _read_windows_key()
        return _read_posix_key(stream)
    return _decode(stream.read(1), lambda: stream.read(1))


class Menu:
    """A vertical list of options moved with the arrows and chosen with Enter.

    The last item always leaves the menu; the others run their action, if any.
    """

    def __init__(
        self,
        title: str,
        items: Sequence[Item],
        *,
        get_key: Optional[Callable[[], int]] = None,
        out: Optional[Callable[[str], None]] = None,
        wait_key: Optional[Callable[[], Any]] = None,
        x: int = 50,
        title_x: int = 50,
        pause_after: bool = False,
        clear_each_loop: bool = False,
    ) -> None:
        if not items:
            raise ValueError("a menu needs at least one item")
        self.title = title
        self.items: List[Item] = list(items)
        self.get_key = get_key if get_key is not None else _read_key
        self.out = out if out is not None else _write
        self.wait_key = wait_key if wait_key is not None else self.get_key
        self.x = x
        self.title_x = title_x
        self.pause_after = pause_after
        self.clear_each_loop = clear_each_loop
        self.selected = 0

    @property
    def _marker_x(self) -> int:
        return self.x - 2

    def move(self, key: int) -> int:
        """Move the selection for an arrow key, staying inside the list."""
        if key == Key.UP:
            self.selected = max(self.selected - 1, 0)
        elif key == Key.DOWN:
            self.selected = min(self.selected + 1, len(self.items) - 1)
        return self.selected

    def render(self) -> str:
        """Return the escape sequences and text that draw the menu."""
        parts = [
            BG_BLACK,
            FG_WHITE,
            HIDE_CURSOR,
            locate(self.title_x, TITLE_ROW),
            self.title,
        ]
        for row, (label, _) in enumerate(self.items):
            background = BG_BLUE if row == self.selected else BG_BLACK
            parts.append(
                f"{background}{locate(self.x, FIRST_ROW + row)}{label}\n{BG_BLACK}"
            )
        parts.append(locate(self._marker_x, FIRST_ROW + self.selected) + MARKER)
        return "".join(parts)

    def run(self) -> int:
        """Show the menu until its last item is chosen; returns 0."""
        self.selected = 0
        exit_row = len(self.items) - 1
        while True:
            if self.clear_each_loop:
                self.out(CLEAR_SCREEN)
            self.out(self.render())
            key = self.get_key()
            if key in (Key.UP, Key.DOWN):
                self.out(locate(self._marker_x, FIRST_ROW + self.selected) + " \n")
                self.move(key)
            elif key == Key.ENTER:
                self.out(CLEAR_SCREEN)
                if self.selected == exit_row:
                    return 0
                _, action = self.items[self.selected]
                if action is not None:
                    action()
                if self.pause_after:
                    self.wait_key()


class MenuAdministrador(Menu):
    """Administrator menu: specialties, doctors and reports."""

    def __init__(
        self,
        especialidades: Optional[EspecialidadManager] = None,
        medicos: Optional[MedicoManager] = None,
        **options: Any,
    ) -> None:
        self.especialidades = (
            especialidades if especialidades is not None else EspecialidadManager()
        )
        self.medicos = medicos if medicos is not None else MedicoManager()
        self._options = options
        super().__init__(
            " MENU ADMINISTRADOR ",
            [
                (" 1. CARGAR NUEVO USUARIO ", None),
                (" 2. ELIMINAR USUARIO ", None),
                (" 3. LISTAR USUARIOS ", None),
                (" 4. INFORMES ", self.informes),
                (" 5. CARGAR ESPECIALIDAD ", self.especialidades.cargar),
                (" 6. LISTAR ESPECIALIDAD ", self.especialidades.mostrar),
                (" 7. CARGAR MEDICO ", self.medicos.cargar),
                (" 8. LISTAR MEDICOS ", self.medicos.mostrar),
                (" 0. CERRAR SESION ", None),
            ],
            **options,
        )

    def informes(self) -> int:
        """Show the administrator's reports menu."""
        return Menu(
            " - INFORMES ADMINISTRADOR - ",
            [
                (" 1. CANTIDAD DE TURNOS POR MEDICO ", None),
                (" 2. CANTIDAD DE TURNOS POR PACIENTE ", None),
                (" 3. CANTIDAD DE TURNOS CANCELADOS POR MES ", None),
                (" 4. CANTIDAD DE TURNOS REPROGRAMADOS POR MES ", None),
                (" 5. CANTIDAD DE TURNOS POR ESPECIALIDAD ", None),
                (" 6. CANTIDAD DE USURIOS ACTIVOS ", None),
                (" 0. VOLVER AL MENU ANTERIOR ", None),
            ],
            title_x=55,
            pause_after=True,
            clear_each_loop=True,
            **self._options,
        ).run()


class MenuRecepcionista(Menu):
    """Receptionist menu: appointments, queries and reports."""

    def __init__(
        self,
        turnos: Optional[TurnoManager] = None,
        medicos: Optional[MedicoManager] = None,
        **options: Any,
    ) -> None:
        self.turnos = turnos if turnos is not None else TurnoManager()
        self.medicos = medicos if medicos is not None else MedicoManager()
        self._options = options
        super().__init__(
            " MENU RECEPCIONISTA ",
            [
                (" 1. REGISTRAR PACIENTE ", None),
                (" 2. LISTAR PACIENTES ", None),
                (" 3. ASIGNAR NUEVO TURNO ", self.turnos.cargar),
                (" 4. REPROGRAMAR TURNO ", self.turnos.reprogramar),
                (" 5. CANCELAR TURNO ", self.turnos.cancelar),
                (" 6. TURNO NO ASISTIDO ", self.turnos.marcar_no_asistido),
                (" 7. CONSULTAS ", self.consultas),
                (" 8. INFORMES ", self.informes),
                (" 9. LISTAR TURNOS ", self.turnos.mostrar),
                (" 0. CERRAR SESION ", None),
            ],
            **options,
        )

    def consultas(self) -> int:
        """Show the receptionist's queries menu."""
        return Menu(
            " - CONSULTAS RECEPCIONISTA - ",
            [
                (
                    " 1. BUSCAR TURNO POR ESTADO "
                    "(ACTIVO, CANCELADO, REPROGRAMADO, NO ASISTIDO) ",
                    self.turnos.buscar_por_estado,
                ),
                (
                    " 2. BUSCAR MEDICOS POR ESPECIALIDAD ",
                    self.medicos.buscar_por_especialidad,
                ),
                (" 3. VER TURNOS DEL DIA ", self.turnos.turnos_del_dia),
                (" 4. VER TURNOS DE LA SEMANA ", self.turnos.turnos_de_la_semana),
                (" 0. VOLVER AL MENU ANTERIOR ", None),
            ],
            x=30,
            pause_after=True,
            **self._options,
        ).run()

    def informes(self) -> int:
        """Show the receptionist's reports menu."""
        return Menu(
            " - INFORMES RECEPCIONISTA - ",
            [
                (
                    " 1. CANTIDAD TURNOS POR ESPECIALIDAD ",
                    self.turnos.cantidad_por_especialidad,
                ),
                (
                    " 2. CANTIDAD DE TURNOS NO ASISTIDOS POR MEDICO ",
                    self.turnos.cantidad_no_asistidos,
                ),
                (" 0. VOLVER AL MENU PRINICPAL ", None),
            ],
            title_x=55,
            pause_after=True,
            **self._options,
        ).run()


class MenuMedico(Menu):
    """Doctor menu."""

    def __init__(self, **options: Any) -> None:
        super().__init__(
            " MENU MEDICO ",
            [
                (" 1. VER TURNOS ASIGNADOS ", None),
                (" 2. BUSCAR TURNOS POR FECHAS ", None),
                (" 3. VER HISTORIAL DE TURNOS ATENDIDOS ", None),
                (" 4. BUSCAR PACIENTE POR DNI ASOCIADO AL TURNO ", None),
                (" 0. CERRAR SESION ", None),
            ],
            pause_after=True,
            **options,
        )