from __future__ import annotations

from uuid import uuid4

import pytest

from parley import main as main_module
from parley.domain.collections import PageMeta, ResultPage

EMPTY_PAGE = ResultPage(
    data=[],
    meta=PageMeta(
        index=True,
        page_id=None,
        next_page_id=None,
        next_page_route=None,
        final_page=True,
        per_page=25,
        results=0,
        total=0,
    ),
)


def test_purge_messages_prints_count(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}

    def fake_purge(**kwargs: object) -> int:
        captured.update(kwargs)
        return 4

    monkeypatch.setattr(main_module, "purge_archived_messages", fake_purge)

    main_module.main(["purge-messages", "--days", "10"])

    assert captured == {"days": 10}
    assert "We purged 4 archived messages!" in capsys.readouterr().out


def test_purge_messages_uses_configured_days_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_purge(**kwargs: object) -> int:
        captured.update(kwargs)
        return 0

    monkeypatch.setattr(main_module, "purge_archived_messages", fake_purge)

    main_module.main(["purge-messages"])

    assert captured == {"days": None}


def test_privates_prints_page_json(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    provider_id, page_id = uuid4(), uuid4()
    captured: dict[str, object] = {}

    def fake_list(owner_id: object, **kwargs: object) -> ResultPage:
        captured["owner_id"] = owner_id
        captured.update(kwargs)
        return EMPTY_PAGE

    monkeypatch.setattr(main_module, "list_private_threads", fake_list)

    main_module.main(["privates", "--provider-id", str(provider_id), "--page-id", str(page_id)])

    assert captured == {"owner_id": provider_id, "page_id": page_id}
    assert '"final_page": true' in capsys.readouterr().out


def test_calls_passes_parsed_thread_id(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    thread_id = uuid4()
    captured: dict[str, object] = {}

    def fake_list(target_id: object, **kwargs: object) -> ResultPage:
        captured["thread_id"] = target_id
        captured.update(kwargs)
        return EMPTY_PAGE

    monkeypatch.setattr(main_module, "list_calls", fake_list)

    main_module.main(["calls", "--thread-id", str(thread_id)])

    assert captured == {"thread_id": thread_id, "page_id": None}
    assert '"results": 0' in capsys.readouterr().out


def test_calls_requires_valid_uuid(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "list_calls", lambda *_, **__: EMPTY_PAGE)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["calls", "--thread-id", "not-a-uuid"])

    assert excinfo.value.code == 2


@pytest.mark.parametrize(
    "argv",
    [[], ["purge-messages", "--days", "-1"], ["privates"], ["unknown"]],
)
def test_invalid_arguments_exit_with_2(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main(argv)

    assert excinfo.value.code == 2


def test_failures_exit_with_1(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_list(*_: object, **__: object) -> ResultPage:
        raise LookupError("thread does not exist")

    monkeypatch.setattr(main_module, "list_calls", fake_list)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["calls", "--thread-id", str(uuid4())])

    assert excinfo.value.code == 1
