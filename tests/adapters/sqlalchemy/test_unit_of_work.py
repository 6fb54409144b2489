from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from parley.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from tests.helpers.messenger import make_group_thread, make_provider

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_sqlalchemy_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b
    assert is_started() is True


def test_unit_of_work_persists_on_commit(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    provider = make_provider()

    with SqlAlchemyUnitOfWork() as uow:
        uow.repositories.providers.add(provider)
        uow.commit()

    with SqlAlchemyUnitOfWork() as uow:
        stored = uow.repositories.providers.get(provider.id)
        assert stored is not None
        assert stored.name == provider.name


def test_unit_of_work_rolls_back_on_error(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    thread = make_group_thread()

    with pytest.raises(RuntimeError), SqlAlchemyUnitOfWork() as uow:
        uow.repositories.threads.add(thread)
        uow.session.flush()
        raise RuntimeError("boom")

    with SqlAlchemyUnitOfWork() as uow:
        assert uow.repositories.threads.get(thread.id) is None


def test_repositories_require_an_open_session(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyUnitOfWork()

    with pytest.raises(StartupError):
        _ = uow.repositories
