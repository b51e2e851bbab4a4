"""
Carga el consultorio demo en la base configurada.

Uso:
    python scripts/seed_demo.py [--force]

Sin --force no toca una base que ya tenga snapshot guardado.
"""

import asyncio
import sys
from pathlib import Path

# Agregar el directorio raíz al path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dentalflow.database import async_session_factory, create_tables, engine  # noqa: E402
from dentalflow.persistence import SqlSnapshotBackend  # noqa: E402
from dentalflow.schemas.snapshot import Snapshot  # noqa: E402
from dentalflow.seed import demo_records  # noqa: E402


async def seed_demo(force: bool) -> None:
    await create_tables()
    backend = SqlSnapshotBackend(async_session_factory)

    existing = await backend.load_snapshot()
    if existing is not None and not force:
        print(
            f"⚠️  Ya hay datos guardados ({len(existing.patients)} pacientes). "
            "Use --force para reemplazarlos."
        )
        await engine.dispose()
        return

    snapshot = Snapshot(**demo_records())
    await backend.save_snapshot(snapshot)
    await engine.dispose()

    print(
        f"Seed completado: {len(snapshot.users)} usuarios, "
        f"{len(snapshot.patients)} pacientes, {len(snapshot.treatments)} tratamientos."
    )
    print("Usuarios demo: admin/admin, doc1/doc1, recepcion/recepcion")


def main():
    force = "--force" in sys.argv[1:]
    asyncio.run(seed_demo(force))


if __name__ == "__main__":
    main()
