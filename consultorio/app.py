"""Entry point of the appointment management console."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from .especialidades import EspecialidadManager
from .medicos import MedicoManager
from .menus import (
    RESET_ATTRIBUTES,
    SHOW_CURSOR,
    Menu,
    MenuAdministrador,
    MenuMedico,
    MenuRecepcionista,
    _write,
)
from .storage import EspecialidadArchivo, MedicoArchivo, PacienteArchivo, TurnoArchivo
from .turnos import TurnoManager


def _main_menu(data_dir: Path) -> Menu:
    especialidades = EspecialidadArchivo(data_dir / EspecialidadArchivo.default_filename)
    medicos = MedicoArchivo(data_dir / MedicoArchivo.default_filename)
    pacientes = PacienteArchivo(data_dir / PacienteArchivo.default_filename)
    turnos = TurnoArchivo(data_dir / TurnoArchivo.default_filename)

    def administrador() -> int:
        return MenuAdministrador(
            especialidades=EspecialidadManager(especialidades),
            medicos=MedicoManager(medicos),
        ).run()

    def recepcionista() -> int:
        return MenuRecepcionista(
            turnos=TurnoManager(
                turnos,
                pacientes=pacientes,
                medicos=medicos,
                especialidades=especialidades,
            ),
            medicos=MedicoManager(medicos),
        ).run()

    def medico() -> int:
        return MenuMedico().run()

    return Menu(
        " SISTEMA DE GESTION DE TURNOS ",
        [
            (" 1. INGRESAR COMO ADMINISTRADOR ", administrador),
            (" 2. INGRESAR COMO RECEPCIONISTA ", recepcionista),
            (" 3. INGRESAR COMO MEDICO ", medico),
            (" 4. SALIR", None),
        ],
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the console until the user chooses to leave or input ends."""
    parser = argparse.ArgumentParser(
        prog="consultorio", description="Gestion de turnos de un consultorio."
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path("."),
        help="directorio de los archivos de datos",
    )
    args = parser.parse_args(argv)
    args.data_dir.mkdir(parents=True, exist_ok=True)
    try:
        return _main_menu(args.data_dir).run()
    except (EOFError, KeyboardInterrupt):
        return 0
    finally:
        _write(RESET_ATTRIBUTES + SHOW_CURSOR)


if __name__ == "__main__":
    raise SystemExit(main())