import unittest
from unittest import mock

from core.config import Settings
from core.db import sanitize_database_url

BASE_ENV = {
    "DATABASE_URL": "postgresql://u:p@db:5432/logs",
    "JWT_SECRET": "s3cret-value-for-tests-0123456789abcdef",
}


class SettingsFromEnvTests(unittest.TestCase):
    def test_defaults(self):
        with mock.patch.dict("os.environ", BASE_ENV, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings.port, 10000)
        self.assertEqual(settings.bcrypt_rounds, 10)
        self.assertIsNone(settings.access_token_expire_minutes)
        self.assertIsNone(settings.admin_username)
        self.assertEqual(settings.cors_origins, [])

    def test_overrides(self):
        env = dict(
            BASE_ENV,
            PORT="8080",
            ACCESS_TOKEN_EXPIRE_MIN="60",
            BCRYPT_ROUNDS="2",
            ADMIN_USERNAME=" root ",
            ADMIN_PASSWORD="pw",
            CORS_ORIGINS="http://a.test, http://b.test,",
            LOG_LEVEL="debug",
        )
        with mock.patch.dict("os.environ", env, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings.port, 8080)
        self.assertEqual(settings.access_token_expire_minutes, 60)
        self.assertEqual(settings.bcrypt_rounds, 4)
        self.assertEqual(settings.admin_username, "root")
        self.assertEqual(settings.cors_origins, ["http://a.test", "http://b.test"])
        self.assertEqual(settings.log_level, "DEBUG")

    def test_secrets_are_required(self):
        for missing in ("DATABASE_URL", "JWT_SECRET"):
            env = {k: v for k, v in BASE_ENV.items() if k != missing}
            with mock.patch.dict("os.environ", env, clear=True):
                with self.assertRaises(RuntimeError):
                    Settings.from_env()

    def test_sslmode_is_stripped(self):
        url = "postgresql://u:p@db/logs?sslmode=require&application_name=api"
        self.assertEqual(sanitize_database_url(url), "postgresql://u:p@db/logs?application_name=api")


if __name__ == "__main__":
    unittest.main()
