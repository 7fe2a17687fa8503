# consultorio

A keyboard-driven console program for the front desk of a small medical
practice. It keeps doctors, specialties, patients and appointments in
fixed-size binary record files. It offers three role menus. The prompts and
messages are in Spanish.

## Installing

```
pip install .
```

## Running

```
consultorio
consultorio --data-dir ruta/a/los/datos
```

`--data-dir` selects the directory that holds the data files. The directory
is created if it does not exist. The default is the current directory.

Move through a menu with the up and down arrow keys. Press Enter to choose an
entry. The last entry of each menu goes back or closes the session. When
standard input ends, or on Ctrl-C, the program exits with status 0.

### Main menu

- **Ingresar como administrador**:
  - load a specialty (ID, name, active or not);
  - list specialties;
  - load a doctor (personal data, address, registration number, specialty ID);
  - list doctors.
- **Ingresar como recepcionista**:
  - book an appointment;
  - reschedule an active appointment;
  - cancel an appointment;
  - mark an appointment as missed;
  - list all appointments.
  - *Consultas*:
    - appointments in a given state;
    - active doctors of a specialty;
    - today's active appointments;
    - this week's active appointments.
  - *Informes*:
    - active and rescheduled appointments per specialty;
    - missed appointments per doctor.
- **Ingresar como medico**: the doctor's menu.

After an action, the program asks you to press Enter to go on.

## Data files

| File               | Contents      |
|--------------------|---------------|
| `especialidad.dat` | specialties   |
| `Medicos.dat`      | doctors       |
| `Pacientes.dat`    | patients      |
| `Turnos.dat`       | appointments  |

A new record gets an ID equal to the number of records already in its file,
plus one. Records are never deleted.

An appointment has one of these states (`EstadoTurno`):

- `ACTIVO`
- `CANCELADO`
- `REPROGRAMADO`
- `NO_ASISTIDO`

Only an active or rescheduled appointment can be cancelled or marked as
missed. Only an active appointment can be rescheduled, and rescheduling
moves it to `REPROGRAMADO`.

Booking an appointment checks four things:

- the patient exists and is active;
- the doctor exists and is active;
- the specialty exists and is active;
- the doctor has no other active appointment at the same date and time.

The weekly listing starts on the Monday of the current week. It only shows
days that fall in the same month as that Monday.

## What it does not do

- **Patients.** No menu entry registers or lists patients. The
  recepcionista menu shows *Registrar paciente* and *Listar pacientes*, but
  they do nothing. Patients can only be written to `Pacientes.dat` through
  `PacienteArchivo`. Booking an appointment needs them there.
- **Users.** There are no user accounts or logins. The administrator's user
  entries do nothing.
- **Reports and the doctor's menu.** The administrator's *Informes* entries
  do nothing. Neither do the entries of the doctor's menu.
- **Deactivating a specialty.** This is done by `EspecialidadManager.dar_baja`.
  No menu entry calls it.

## Using it as a library

The record types live in `consultorio.models`:

- `Domicilio`
- `Especialidad`
- `Persona`
- `Medico`
- `Paciente`
- `Turno`
- `EstadoTurno`

The file stores live in `consultorio.storage`. They are
`EspecialidadArchivo`, `MedicoArchivo`, `PacienteArchivo` and
`TurnoArchivo`, all built on `RecordFile`. `RecordFile` offers these
methods:

- `append`
- `write_at`
- `find`
- `read`
- `read_all`
- `count`
- `next_id`
- `is_active`

`TurnoArchivo` adds `has_conflict`.

```python
from consultorio.models import Especialidad
from consultorio.storage import EspecialidadArchivo

archivo = EspecialidadArchivo("especialidad.dat")
archivo.append(Especialidad(archivo.next_id(), "Cardiologia", True))
print(archivo.count(), archivo.is_active(1))
```

The console managers are in `consultorio.especialidades`,
`consultorio.medicos` and `consultorio.turnos`. They take `ask`, `out` and
`pause` callables in place of the console. The reports can be computed
without the menus:

- `consultorio.turnos.count_by_especialidad`
- `consultorio.turnos.count_no_asistidos`

## Tests

```
pip install ".[test]"
pytest
```