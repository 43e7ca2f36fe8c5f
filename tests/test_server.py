import os
import shutil
import tempfile
import unittest

from ayo_contact.config import Settings
from ayo_contact.server import create_app
from tests.fakes import RecordingMailSender

VALID_FORM = {
    "name": "Jane",
    "email": "jane@x.com",
    "service": "Branding",
    "budget": "$500",
    "timeline": "2 weeks",
    "message": "Hello\nWorld",
}


class ServerTestCase(unittest.TestCase):
    environment = "development"

    def setUp(self):
        self.public_dir = tempfile.mkdtemp()
        with open(os.path.join(self.public_dir, "index.html"), "w", encoding="utf-8") as f:
            f.write("<h1>Ayo Creative Designs</h1>")
        with open(os.path.join(self.public_dir, "style.css"), "w", encoding="utf-8") as f:
            f.write("body { color: #333; }")

        self.settings = Settings(resend_api_key="re_test", business_email="owner@example.com",
                                 environment=self.environment, public_dir=self.public_dir)
        self.sender = RecordingMailSender()
        self.app = create_app(self.settings, self.sender)
        self.client = self.app.test_client()

    def tearDown(self):
        shutil.rmtree(self.public_dir)


class TestSendEmail(ServerTestCase):
    def test_json_submission(self):
        response = self.client.post("/send-email", json=VALID_FORM)
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertTrue(body["success"])
        self.assertTrue(body["message"].startswith("Email sent successfully!"))
        owner, reply = self.sender.sent
        self.assertEqual(owner.subject, "New Project Inquiry from Jane")
        self.assertEqual(reply.recipient, "jane@x.com")
        self.assertEqual(reply.subject, "Thank you for contacting Ayo Creative Designs")

    def test_form_encoded_submission(self):
        response = self.client.post("/send-email", data=VALID_FORM)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(self.sender.sent), 2)

    def test_missing_message(self):
        form = dict(VALID_FORM)
        del form["message"]
        response = self.client.post("/send-email", json=form)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json(),
                         {"success": False, "message": "Please fill in all required fields"})
        self.assertEqual(self.sender.attempts, 0)

    def test_non_object_json(self):
        response = self.client.post("/send-email", json=["Jane"])
        self.assertEqual(response.status_code, 400)

    def test_unconfigured_service(self):
        app = create_app(self.settings, RecordingMailSender(configured=False))
        response = app.test_client().post("/send-email", json=VALID_FORM)
        self.assertEqual(response.status_code, 500)
        self.assertFalse(response.get_json()["success"])

    def test_cors_allows_site_origin(self):
        response = self.client.post("/send-email", json=VALID_FORM,
                                    headers={"Origin": "https://ayocreativedesigns.com"})
        self.assertEqual(response.headers.get("Access-Control-Allow-Origin"), "https://ayocreativedesigns.com")

    def test_cors_ignores_other_origins(self):
        response = self.client.post("/send-email", json=VALID_FORM,
                                    headers={"Origin": "https://evil.example"})
        self.assertIsNone(response.headers.get("Access-Control-Allow-Origin"))


class TestHealthAndStatic(ServerTestCase):
    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body["status"], "OK")
        self.assertTrue(body["timestamp"].endswith("Z"))
        self.assertTrue(body["email_configured"])
        self.assertEqual(body["provider"], "fake")
        self.assertIn("RESEND_API_KEY", body["env_vars"])

    def test_index(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"Ayo Creative Designs", response.data)
        response.close()

    def test_existing_static_file(self):
        response = self.client.get("/style.css")
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"color", response.data)
        response.close()

    def test_unknown_path_serves_index(self):
        response = self.client.get("/services/branding")
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"Ayo Creative Designs", response.data)
        response.close()

    def test_path_traversal_serves_index(self):
        response = self.client.get("/../secrets.txt")
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"Ayo Creative Designs", response.data)
        response.close()

    def test_no_https_redirect_outside_production(self):
        response = self.client.get("/", headers={"X-Forwarded-Proto": "http"})
        self.assertEqual(response.status_code, 200)
        response.close()


class TestHttpsEnforcement(ServerTestCase):
    environment = "production"

    def test_http_is_redirected(self):
        response = self.client.get("/about", headers={"X-Forwarded-Proto": "http"})
        self.assertEqual(response.status_code, 301)
        self.assertTrue(response.headers["Location"].startswith("https://"))
        self.assertTrue(response.headers["Location"].endswith("/about"))

    def test_https_is_served(self):
        response = self.client.get("/", headers={"X-Forwarded-Proto": "https"})
        self.assertEqual(response.status_code, 200)
        response.close()

    def test_health_is_exempt(self):
        response = self.client.get("/health", headers={"X-Forwarded-Proto": "http"})
        self.assertEqual(response.status_code, 200)


if __name__ == '__main__':
    unittest.main()
