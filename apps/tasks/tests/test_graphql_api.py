"""
Integration tests for the /graphql endpoint.
"""
import json
import uuid
from unittest import mock

from django.test import Client, TestCase

from apps.tasks.models import Task
from config import urls

from .fakes import UnavailableTaskStore


ADD_TASK = "mutation($title: String!) { addTask(title: $title) { id title done createdAt updatedAt } }"
TOGGLE_TASK = "mutation($id: ID!) { toggleTask(id: $id) { id title done } }"
DELETE_TASK = "mutation($id: ID!) { deleteTask(id: $id) }"
LIST_TASKS = "{ tasks { id title done } }"
GET_TASK = "query($id: ID!) { task(id: $id) { id title done } }"


class GraphQLTestMixin:
    def gql(self, query, **variables):
        return self.client.post(
            "/graphql",
            data=json.dumps({"query": query, "variables": variables}),
            content_type="application/json",
        )


class TaskGraphQLTest(GraphQLTestMixin, TestCase):
    def setUp(self):
        self.client = Client()

    def _add(self, title="Learn GraphQL"):
        return self.gql(ADD_TASK, title=title).json()["data"]["addTask"]

    def test_add_task(self):
        response = self.gql(ADD_TASK, title="Learn GraphQL")
        self.assertEqual(response.status_code, 200)
        task = response.json()["data"]["addTask"]
        self.assertEqual(task["title"], "Learn GraphQL")
        self.assertFalse(task["done"])
        self.assertTrue(Task.objects.filter(id=task["id"]).exists())

    def test_add_task_blank_title(self):
        for title in ["", "   "]:
            with self.subTest(title=title):
                response = self.gql(ADD_TASK, title=title)
                body = response.json()
                self.assertEqual(response.status_code, 400)
                self.assertIsNone(body["data"])
                self.assertEqual(body["errors"][0]["message"], "title required")
                self.assertEqual(body["errors"][0]["extensions"]["code"], "VALIDATION_ERROR")
        self.assertEqual(Task.objects.count(), 0)

    def test_tasks_newest_first(self):
        first = self._add("first")
        second = self._add("second")
        tasks = self.gql(LIST_TASKS).json()["data"]["tasks"]
        self.assertEqual([t["id"] for t in tasks], [second["id"], first["id"]])

    def test_toggle_task_twice(self):
        task = self._add()
        toggled = self.gql(TOGGLE_TASK, id=task["id"]).json()["data"]["toggleTask"]
        self.assertTrue(toggled["done"])
        toggled = self.gql(TOGGLE_TASK, id=task["id"]).json()["data"]["toggleTask"]
        self.assertFalse(toggled["done"])

    def test_toggle_unknown_or_malformed_id(self):
        self._add()
        for task_id in [str(uuid.uuid4()), "bogus"]:
            with self.subTest(task_id=task_id):
                response = self.gql(TOGGLE_TASK, id=task_id)
                body = response.json()
                self.assertEqual(response.status_code, 404)
                self.assertIsNone(body["data"])
                self.assertEqual(body["errors"][0]["message"], "not found")
        self.assertFalse(Task.objects.get().done)

    def test_client_errors_log_warning_without_traceback(self):
        with self.assertNoLogs("strawberry.execution", level="ERROR"):
            with self.assertLogs("apps.tasks.graphql_api", level="WARNING") as logs:
                self.gql(TOGGLE_TASK, id=str(uuid.uuid4()))
                self.gql(ADD_TASK, title="   ")
        self.assertEqual(len(logs.records), 2)
        self.assertTrue(all(r.exc_info is None for r in logs.records))
        self.assertIn("not found", logs.output[0])

    def test_delete_task(self):
        task = self._add()
        response = self.gql(DELETE_TASK, id=task["id"])
        self.assertEqual(response.json()["data"], {"deleteTask": True})
        self.assertEqual(Task.objects.count(), 0)

    def test_delete_missing_task_is_error(self):
        task = self._add()
        self.gql(DELETE_TASK, id=task["id"])

        response = self.gql(DELETE_TASK, id=task["id"])
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["errors"][0]["message"], "not found")

        response = self.gql(TOGGLE_TASK, id=task["id"])
        self.assertEqual(response.json()["errors"][0]["message"], "not found")

    def test_task_lookup(self):
        task = self._add()
        found = self.gql(GET_TASK, id=task["id"]).json()
        self.assertEqual(found["data"]["task"], {"id": task["id"], "title": task["title"], "done": False})

    def test_task_lookup_absent_is_null_not_error(self):
        for task_id in [str(uuid.uuid4()), "bogus"]:
            with self.subTest(task_id=task_id):
                body = self.gql(GET_TASK, id=task_id).json()
                self.assertEqual(body["data"], {"task": None})
                self.assertNotIn("errors", body)


class TaskGraphQLStoreFailureTest(GraphQLTestMixin, TestCase):
    def setUp(self):
        patcher = mock.patch.object(urls.task_service, "store", UnavailableTaskStore())
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_mutation_reports_store_failure(self):
        response = self.gql(ADD_TASK, title="x")
        body = response.json()
        self.assertEqual(response.status_code, 500)
        self.assertIsNone(body["data"])
        self.assertEqual(body["errors"][0]["message"], "store unavailable")
        self.assertEqual(body["errors"][0]["extensions"]["code"], "STORE_UNAVAILABLE")

    def test_query_reports_store_failure(self):
        response = self.gql(LIST_TASKS)
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["errors"][0]["message"], "store unavailable")

    def test_store_failure_keeps_error_log(self):
        with self.assertLogs("strawberry.execution", level="ERROR"):
            self.gql(LIST_TASKS)
