import unittest
from datetime import date

from exercise_tracker.db import ExerciseRecord, InMemoryDbClient, SqlDbClient, UserRecord


class SqlDbClientTests(unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the SQL client logic.
    """

    def setUp(self):
        self.db = SqlDbClient("sqlite+pysqlite:///:memory:")

    def tearDown(self):
        self.db.close()

    def test_create_and_get_user(self):
        user = self.db.create_user("alice")
        self.assertEqual(len(user.id), 32)
        self.assertEqual(user.exercises, [])
        fetched = self.db.get_user(user.id)
        self.assertIsNotNone(fetched)
        self.assertEqual(fetched.username, "alice")

    def test_get_missing_user(self):
        self.assertIsNone(self.db.get_user("missing"))

    def test_list_users_projection(self):
        first = self.db.create_user("a")
        second = self.db.create_user("b")
        listed = {(user.id, user.username) for user in self.db.list_users()}
        self.assertEqual(listed, {(first.id, "a"), (second.id, "b")})

    def test_save_appends_in_order(self):
        user = self.db.create_user("runner")
        user.add_exercise(ExerciseRecord("run", 30, date(2024, 1, 2)))
        user.add_exercise(ExerciseRecord("swim", 45, date(2024, 1, 1)))
        self.db.save_user(user)

        loaded = self.db.get_user(user.id)
        self.assertEqual(
            loaded.exercises,
            [
                ExerciseRecord("run", 30, date(2024, 1, 2)),
                ExerciseRecord("swim", 45, date(2024, 1, 1)),
            ],
        )

        loaded.add_exercise(ExerciseRecord("bike", 10, date(2024, 1, 3)))
        self.db.save_user(loaded)
        self.assertEqual(len(self.db.get_user(user.id).exercises), 3)

    def test_save_unknown_user(self):
        with self.assertRaises(KeyError):
            self.db.save_user(UserRecord(id="missing", username="ghost"))


class InMemoryDbClientTests(unittest.TestCase):
    def test_returned_records_are_copies(self):
        db = InMemoryDbClient()
        user = db.create_user("alice")
        user.add_exercise(ExerciseRecord("run", 30, date(2024, 1, 1)))
        self.assertEqual(db.get_user(user.id).exercises, [])

        db.save_user(user)
        self.assertEqual(len(db.get_user(user.id).exercises), 1)

    def test_reset(self):
        db = InMemoryDbClient()
        db.create_user("alice")
        db.reset()
        self.assertEqual(db.list_users(), [])


if __name__ == "__main__":
    unittest.main()
