import unittest
from unittest.mock import patch

from fakes import FakeTaskApi
from task_tracker.client import LocalStorage, Outbox, PendingOperation
from task_tracker.errors import ApiError
from task_tracker.models import Task

TASK_ID = "3f2b8c1e-9d4a-4b6f-8e2a-1c5d7e9f0a1b"


class FailingApi(FakeTaskApi):
    def __init__(self, status_code):
        super().__init__()
        self.status_code = status_code

    def delete_task(self, task_id):
        self.calls.append(("delete_task", task_id))
        raise ApiError(self.status_code, "nope")


class OutboxTestCase(unittest.TestCase):
    def setUp(self):
        self.storage = LocalStorage(":memory:")
        self.outbox = Outbox(self.storage)
        self.api = FakeTaskApi()

    def tearDown(self):
        self.storage.close()

    def test_replay_sends_in_order(self):
        self.outbox.enqueue(PendingOperation("create", TASK_ID, {"description": "Buy milk", "category": "Personal"}))
        self.outbox.enqueue(PendingOperation("update", TASK_ID, {"completed": True}))

        self.assertTrue(self.outbox.replay(self.api))

        self.assertEqual(len(self.outbox), 0)
        self.assertEqual([c[0] for c in self.api.calls], ["create_task", "update_task"])
        self.assertTrue(self.api.tasks[TASK_ID].completed)

    def test_offline_keeps_operations(self):
        self.api.online = False
        self.outbox.enqueue(PendingOperation("delete", TASK_ID))

        self.assertFalse(self.outbox.replay(self.api))
        self.assertEqual(len(self.outbox), 1)

    def test_pending_survives_restart(self):
        self.outbox.enqueue(PendingOperation("update", TASK_ID, {"completed": False}))
        reopened = Outbox(self.storage)
        self.assertEqual(reopened.pending(), [PendingOperation("update", TASK_ID, {"completed": False})])

    def test_already_applied_operations_are_dropped(self):
        self.api.tasks[TASK_ID] = Task.create("Buy milk", "Personal", task_id=TASK_ID)
        self.outbox.enqueue(PendingOperation("create", TASK_ID, {"description": "Buy milk", "category": "Personal"}))
        self.outbox.enqueue(PendingOperation("delete", TASK_ID))
        self.outbox.enqueue(PendingOperation("delete", TASK_ID))

        self.assertTrue(self.outbox.replay(self.api))
        self.assertEqual(len(self.outbox), 0)
        self.assertNotIn(TASK_ID, self.api.tasks)

    def test_server_error_stops_replay(self):
        api = FailingApi(500)
        self.outbox.enqueue(PendingOperation("delete", TASK_ID))
        self.outbox.enqueue(PendingOperation("delete", TASK_ID))

        self.assertFalse(self.outbox.replay(api))
        self.assertEqual(len(api.calls), 1)
        self.assertEqual(len(self.outbox), 2)

    def test_unusable_operation_is_dropped_and_replay_continues(self):
        self.outbox.enqueue(PendingOperation("archive", TASK_ID))
        self.outbox.enqueue(PendingOperation("create", TASK_ID, {"description": "Buy milk", "category": "Personal"}))

        with self.assertLogs("task_tracker.client.outbox", level="WARNING"):
            self.assertTrue(self.outbox.replay(self.api))

        self.assertEqual(len(self.outbox), 0)
        self.assertIn(TASK_ID, self.api.tasks)

    def test_malformed_server_answer_is_dropped(self):
        self.outbox.enqueue(PendingOperation("update", TASK_ID, {"completed": True}))
        with patch.object(self.api, "update_task", side_effect=ApiError(200, "Malformed task in response")):
            self.assertTrue(self.outbox.replay(self.api))
        self.assertEqual(len(self.outbox), 0)

    def test_unreadable_outbox_is_discarded(self):
        self.storage.set_item("outbox", "[{\"kind\": 1, \"bogus\": true}]")
        self.assertEqual(Outbox(self.storage).pending(), [])


if __name__ == "__main__":
    unittest.main()
