# tests/test_commands.py

from __future__ import annotations

import threading

from taskheap.cli.commands import CommandRegistry, registry

from .fakes import ScriptedInput


def _lock_free_for_other_threads(lock) -> bool:
    """True if another thread could take `lock` right now."""
    result: list[bool] = []

    def try_acquire() -> None:
        got = lock.acquire(blocking=False)
        if got:
            lock.release()
        result.append(got)

    t = threading.Thread(target=try_acquire)
    t.start()
    t.join()
    return result[0]


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, ask):
        called["h3"] += 1
        if ask is not None:
            ask("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["7"])

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", ask=lambda _: "") == "h3"
    assert reg.handle(state, "7") == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 2


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert reg.handle(state, "9") == "Invalid option."
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_help_lists_commands(state) -> None:
    text = registry.handle(state, "/help") or ""
    for name in ("/add", "/list", "/next", "/done", "/tag", "/status", "/exit"):
        assert name in text
    assert registry.handle(state, "/?") == text


def test_add_one_line(state) -> None:
    reply = registry.handle(state, "/add Write report | 5 | work, urgent")
    assert reply == "Task added (id=0)."
    task = state.task_store.peek_next()
    assert task.description == "Write report"
    assert task.priority == 5
    assert task.tags == ["work", "urgent"]


def test_add_one_line_missing_fields_uses_defaults(state) -> None:
    state.settings.default_priority = 3
    assert registry.handle(state, "/add Buy milk") == "Task added (id=0)."
    task = state.task_store.peek_next()
    assert task.priority == 3
    assert task.tags == []


def test_add_prompts_via_menu_number(state) -> None:
    ask = ScriptedInput(["Fix bug", "x", "work,,"])
    assert registry.handle(state, "1", ask=ask) == "Task added (id=0)."
    assert ask.prompts == ["Description: ", "Priority (integer): ", "Tags (comma-separated): "]
    task = state.task_store.peek_next()
    assert task.priority == 0
    assert task.tags == ["work"]


def test_add_without_args_or_prompt_shows_usage(state) -> None:
    assert (registry.handle(state, "/add") or "").startswith("Usage:")
    assert state.task_store.count_tasks() == 0


def test_list_next_done_flow(state) -> None:
    assert registry.handle(state, "2") == "No tasks available."
    assert registry.handle(state, "3") == "No tasks available."
    assert registry.handle(state, "4") == "No tasks to complete."

    registry.handle(state, "/add Write report | 5 | work")
    registry.handle(state, "/add Buy milk | 1 | home")

    listing = registry.handle(state, "/list") or ""
    lines = listing.splitlines()
    assert lines[0] == "Tasks by priority:"
    assert "Write report" in lines[1]
    assert "Buy milk" in lines[2]

    assert "Write report" in (registry.handle(state, "/next") or "")
    done = registry.handle(state, "/done") or ""
    assert done.startswith("Completed task: ")
    assert "Write report" in done
    assert (registry.handle(state, "/next") or "").startswith("Next task: Task(id=0, ")


def test_tag_search(state) -> None:
    registry.handle(state, "/add Write report | 5 | work, urgent")
    registry.handle(state, "/add Fix bug | 5 | work")

    reply = registry.handle(state, "/tag work") or ""
    assert reply.splitlines()[0] == "Tasks with tag 'work':"
    assert len(reply.splitlines()) == 3

    ask = ScriptedInput(["  home "])
    assert registry.handle(state, "5", ask=ask) == "No tasks found for tag 'home'."
    assert ask.prompts == ["Enter tag: "]

    assert (registry.handle(state, "/tag") or "").startswith("Usage:")


def test_status(state) -> None:
    assert "Tasks: 0" in (registry.handle(state, "/status") or "")
    registry.handle(state, "/add Write report | 5 | work, urgent")
    text = registry.handle(state, "/status") or ""
    assert "Tasks: 1" in text
    assert "Tags: urgent, work" in text
    assert "Write report" in text


def test_add_one_line_keeps_inner_whitespace(state) -> None:
    assert registry.handle(state, "/add Call  Bob | 2 | x") == "Task added (id=0)."
    registry.handle(state, "1", ask=ScriptedInput(["Call  Bob", "2", "x"]))

    descriptions = [t.description for t in state.task_store.list_tasks()]
    assert descriptions == ["Call  Bob", "Call  Bob"]


def test_tag_one_line_keeps_inner_whitespace(state) -> None:
    state.task_store.add_task("t", 1, ["two  words"])
    assert "Tasks with tag 'two  words':" in (registry.handle(state, "/tag two  words") or "")


def test_registry_raw_args_passes_rest_of_line(state) -> None:
    reg = CommandRegistry()
    seen: list[list[str]] = []
    def record(state, args):
        seen.append(args)
        return "ok"

    reg.register("raw", record, "r", aliases=["8"], raw_args=True)
    reg.register("split", record, "s")

    reg.handle(state, "/raw  a  b | c ")
    reg.handle(state, "/split a  b")
    reg.handle(state, "8")
    assert seen == [["a  b | c"], ["a", "b"], []]


def test_prompts_run_without_lock_and_store_call_holds_it(state) -> None:
    prompt_lock_free: list[bool] = []

    def ask(prompt: str) -> str:
        prompt_lock_free.append(_lock_free_for_other_threads(state.lock))
        return {"Description: ": "Write report", "Priority (integer): ": "5"}.get(prompt, "work")

    store = state.task_store
    add_lock_free: list[bool] = []
    original_add = store.add_task

    def checking_add(description, priority, tags=()):
        add_lock_free.append(_lock_free_for_other_threads(state.lock))
        return original_add(description, priority, tags)

    store.add_task = checking_add
    try:
        assert registry.handle(state, "1", ask=ask) == "Task added (id=0)."
    finally:
        del store.add_task

    assert prompt_lock_free == [True, True, True]
    assert add_lock_free == [False]
    assert _lock_free_for_other_threads(state.lock)
