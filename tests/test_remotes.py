"""Tests for the remote backend adapters."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from tasksync.adapters.fake_remote import FakeTaskRemote
from tasksync.adapters.http_remote import HttpTaskRemote
from tasksync.config import Config
from tasksync.core.tasks import Task
from tasksync.errors import RemoteError


def _response(status_code: int = 200, payload=None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.text = "body"
    resp.json.return_value = payload
    if resp.ok:
        resp.raise_for_status.return_value = None
    else:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    return resp


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def remote(session):
    return HttpTaskRemote("https://tasks.example.com/api/", token="secret", timeout=5, session=session)


class TestHttpTaskRemote:
    def test_from_config(self):
        config = Config(remote_url="https://tasks.example.com", remote_token="t", remote_timeout=3)
        remote = HttpTaskRemote.from_config(config)
        assert remote.base_url == "https://tasks.example.com"
        assert remote.token == "t"
        assert remote.timeout == 3

    def test_list_tasks(self, remote, session):
        session.request.return_value = _response(
            payload=[
                {"id": "1", "title": "One", "description": "", "completed": False},
                {"id": "2", "title": "Two", "description": "d", "completed": True},
            ]
        )

        tasks = remote.list_tasks()

        assert tasks == [
            Task(id="1", title="One"),
            Task(id="2", title="Two", description="d", completed=True),
        ]
        session.request.assert_called_once_with(
            "GET",
            "https://tasks.example.com/api/tasks",
            headers={"Accept": "application/json", "Authorization": "Bearer secret"},
            timeout=5,
        )

    def test_list_tasks_accepts_wrapped_payload(self, remote, session):
        session.request.return_value = _response(payload={"tasks": [{"id": "1", "title": "One"}]})
        assert remote.list_tasks() == [Task(id="1", title="One")]

    def test_list_tasks_empty_is_not_available(self, remote, session):
        session.request.return_value = _response(payload=[])
        assert remote.list_tasks() is None

    def test_list_tasks_unreachable_is_not_available(self, remote, session):
        session.request.side_effect = requests.ConnectionError("down")
        assert remote.list_tasks() is None

    def test_list_tasks_server_error_raises(self, remote, session):
        session.request.return_value = _response(status_code=500)
        with pytest.raises(RemoteError):
            remote.list_tasks()

    def test_get_task(self, remote, session):
        session.request.return_value = _response(payload={"id": "1", "title": "One"})
        assert remote.get_task("1") == Task(id="1", title="One")
        assert session.request.call_args.args == ("GET", "https://tasks.example.com/api/tasks/1")

    def test_get_task_not_found(self, remote, session):
        session.request.return_value = _response(status_code=404)
        assert remote.get_task("1") is None

    def test_get_task_timeout_is_not_available(self, remote, session):
        session.request.side_effect = requests.Timeout("slow")
        assert remote.get_task("1") is None

    def test_no_token_omits_authorization(self, session):
        remote = HttpTaskRemote("https://tasks.example.com", session=session)
        session.request.return_value = _response(status_code=404)
        remote.get_task("1")
        assert session.request.call_args.kwargs["headers"] == {"Accept": "application/json"}

    def test_save_task(self, remote, session):
        session.request.return_value = _response()
        task = Task(id="1", title="One", description="d")

        remote.save_task(task)

        method, url = session.request.call_args.args
        assert (method, url) == ("PUT", "https://tasks.example.com/api/tasks/1")
        assert session.request.call_args.kwargs["json"] == task.to_api()

    def test_save_task_failure_raises(self, remote, session):
        session.request.return_value = _response(status_code=503)
        with pytest.raises(RemoteError):
            remote.save_task(Task(id="1", title="One"))

    def test_write_unreachable_raises(self, remote, session):
        session.request.side_effect = requests.ConnectionError("down")
        with pytest.raises(RemoteError):
            remote.delete_all_tasks()

    def test_complete_and_activate(self, remote, session):
        session.request.return_value = _response()
        task = Task(id="1", title="One")

        remote.complete_task(task)
        assert session.request.call_args.args == ("POST", "https://tasks.example.com/api/tasks/1/complete")

        remote.activate_task(task)
        assert session.request.call_args.args == ("POST", "https://tasks.example.com/api/tasks/1/activate")

    def test_id_forms_are_no_ops(self, remote, session):
        remote.complete_task("1")
        remote.activate_task("1")
        remote.refresh_tasks()
        session.request.assert_not_called()

    def test_clear_completed(self, remote, session):
        session.request.return_value = _response()
        remote.clear_completed_tasks()
        assert session.request.call_args.args == ("DELETE", "https://tasks.example.com/api/tasks")
        assert session.request.call_args.kwargs["params"] == {"completed": "true"}

    def test_delete_task_missing_is_ignored(self, remote, session):
        session.request.return_value = _response(status_code=404)
        remote.delete_task("1")
        assert session.request.call_args.args == ("DELETE", "https://tasks.example.com/api/tasks/1")

    def test_delete_task_failure_raises(self, remote, session):
        session.request.return_value = _response(status_code=500)
        with pytest.raises(RemoteError):
            remote.delete_task("1")

    def test_ids_are_escaped_in_paths(self, remote, session):
        session.request.return_value = _response()
        task = Task(id="a/b?c#d", title="Odd id")

        remote.delete_task("x?completed=true")
        assert session.request.call_args.args[1] == "https://tasks.example.com/api/tasks/x%3Fcompleted%3Dtrue"
        assert "params" not in session.request.call_args.kwargs

        remote.save_task(task)
        assert session.request.call_args.args[1] == "https://tasks.example.com/api/tasks/a%2Fb%3Fc%23d"

        remote.complete_task(task)
        assert session.request.call_args.args[1] == "https://tasks.example.com/api/tasks/a%2Fb%3Fc%23d/complete"

        remote.activate_task(task)
        assert session.request.call_args.args[1] == "https://tasks.example.com/api/tasks/a%2Fb%3Fc%23d/activate"

        session.request.return_value = _response(status_code=404)
        remote.get_task("a/b")
        assert session.request.call_args.args[1] == "https://tasks.example.com/api/tasks/a%2Fb"

    def test_non_json_body_raises_remote_error(self, remote, session):
        resp = _response()
        resp.json.side_effect = requests.JSONDecodeError("Expecting value", "<html>", 0)
        session.request.return_value = resp

        with pytest.raises(RemoteError):
            remote.list_tasks()
        with pytest.raises(RemoteError):
            remote.get_task("1")

    def test_task_without_id_raises_remote_error(self, remote, session):
        session.request.return_value = _response(payload=[{"title": "No id"}])
        with pytest.raises(RemoteError):
            remote.list_tasks()

        session.request.return_value = _response(payload={"title": "No id"})
        with pytest.raises(RemoteError):
            remote.get_task("1")


class TestFakeTaskRemote:
    def test_empty_has_no_data(self):
        remote = FakeTaskRemote()
        assert remote.list_tasks() is None
        assert remote.get_task("1") is None

    def test_seeded_tasks(self):
        tasks = [Task(id="1", title="One"), Task(id="2", title="Two")]
        remote = FakeTaskRemote(tasks=tasks)
        assert remote.list_tasks() == tasks
        assert remote.get_task("2") == tasks[1]

    @patch("tasksync.adapters.fake_remote.time.sleep")
    def test_reads_wait_for_latency(self, mock_sleep):
        remote = FakeTaskRemote(latency=0.5)
        remote.list_tasks()
        remote.get_task("1")
        assert mock_sleep.call_count == 2
        mock_sleep.assert_called_with(0.5)

    @patch("tasksync.adapters.fake_remote.time.sleep")
    def test_writes_do_not_wait(self, mock_sleep):
        remote = FakeTaskRemote(latency=0.5)
        remote.save_task(Task(id="1", title="One"))
        mock_sleep.assert_not_called()

    def test_write_operations(self):
        active = Task(id="1", title="One")
        remote = FakeTaskRemote(tasks=[active, Task(id="2", title="Two")])

        remote.complete_task(active)
        assert remote.get_task("1").completed is True

        remote.clear_completed_tasks()
        assert [t.id for t in remote.list_tasks()] == ["2"]

        remote.delete_task("2")
        remote.delete_task("missing")
        assert remote.list_tasks() is None

    def test_activate(self):
        done = Task(id="1", title="One", completed=True)
        remote = FakeTaskRemote(tasks=[done])
        remote.activate_task(done)
        assert remote.get_task("1").completed is False

    def test_delete_all(self):
        remote = FakeTaskRemote(tasks=[Task(id="1", title="One")])
        remote.delete_all_tasks()
        assert remote.list_tasks() is None
