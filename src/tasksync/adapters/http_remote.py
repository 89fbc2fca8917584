"""Remote backend adapter - HTTP/JSON client for task sync."""

import logging
from urllib.parse import quote

import requests

from tasksync.config import Config
from tasksync.core.tasks import Task
from tasksync.errors import RemoteError

logger = logging.getLogger(__name__)


class HttpTaskRemote:
    """
    Remote task backend over HTTP.

    Implements TaskDataSource protocol. Reads report None when the backend
    has no data or cannot be reached, and raise RemoteError on unexpected or
    malformed responses. Writes raise RemoteError on failure.
    No business logic - just I/O.
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_config(cls, config: Config) -> "HttpTaskRemote":
        return cls(config.remote_url, token=config.remote_token, timeout=config.remote_timeout)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        return self._session.request(
            method,
            f"{self.base_url}{endpoint}",
            headers=self._headers(),
            timeout=self.timeout,
            **kwargs,
        )

    def _read(self, endpoint: str) -> dict | list | None:
        """GET an endpoint. Returns None on 404 or when the backend is unreachable."""
        try:
            resp = self._request("GET", endpoint)
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.warning(f"Remote unavailable for GET {endpoint}: {e}")
            return None

        if resp.status_code == 404:
            return None
        if not resp.ok:
            raise RemoteError(f"GET {endpoint} failed with {resp.status_code}: {resp.text}")
        try:
            return resp.json()
        except ValueError as e:
            raise RemoteError(f"GET {endpoint} returned a non-JSON body") from e

    def _write(self, method: str, endpoint: str, **kwargs) -> None:
        try:
            resp = self._request(method, endpoint, **kwargs)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise RemoteError(f"{method} {endpoint} failed: {e}") from e

    @staticmethod
    def _task_path(task_id: str, action: str = "") -> str:
        path = f"/tasks/{quote(task_id, safe='')}"
        return f"{path}/{action}" if action else path

    @staticmethod
    def _parse_task(data: dict, endpoint: str) -> Task:
        try:
            return Task.from_api(data)
        except (KeyError, TypeError, AttributeError) as e:
            raise RemoteError(f"GET {endpoint} returned a malformed task: {data!r}") from e

    def list_tasks(self) -> list[Task] | None:
        """Fetch all tasks. Returns None if the backend has none."""
        data = self._read("/tasks")
        if not data:
            return None
        if isinstance(data, dict):
            data = data.get("tasks", [])
        tasks = [self._parse_task(item, "/tasks") for item in data]
        return tasks or None

    def get_task(self, task_id: str) -> Task | None:
        endpoint = self._task_path(task_id)
        data = self._read(endpoint)
        if not data:
            return None
        return self._parse_task(data, endpoint)

    def save_task(self, task: Task) -> None:
        self._write("PUT", self._task_path(task.id), json=task.to_api())

    def complete_task(self, task: Task | str) -> None:
        # The repository resolves ids to tasks from its cache
        if isinstance(task, Task):
            self._write("POST", self._task_path(task.id, "complete"))

    def activate_task(self, task: Task | str) -> None:
        if isinstance(task, Task):
            self._write("POST", self._task_path(task.id, "activate"))

    def clear_completed_tasks(self) -> None:
        self._write("DELETE", "/tasks", params={"completed": "true"})

    def refresh_tasks(self) -> None:
        # Refreshing is handled by the repository
        pass

    def delete_all_tasks(self) -> None:
        self._write("DELETE", "/tasks")

    def delete_task(self, task_id: str) -> None:
        endpoint = self._task_path(task_id)
        try:
            resp = self._request("DELETE", endpoint)
        except requests.RequestException as e:
            raise RemoteError(f"DELETE {endpoint} failed: {e}") from e
        # Deleting an unknown task is not an error
        if resp.status_code != 404 and not resp.ok:
            raise RemoteError(f"DELETE {endpoint} failed with {resp.status_code}: {resp.text}")
