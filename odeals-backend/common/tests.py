"""
Cross-cutting pieces: utility routes, CORS and the API exception handler.
"""
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient

from common.exceptions import api_exception_handler


class UtilityRouteTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_categories(self):
        response = self.client.get("/api/v1/categories")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 8)
        self.assertIn("Men's Salon", response.data)

    def test_user_types(self):
        response = self.client.get("/api/v1/user-types")
        self.assertEqual(response.data, ["consumer", "partner"])


@override_settings(CORS_ALLOWED_ORIGINS=["http://app.example.com"])
class CorsTests(TestCase):
    def test_preflight_for_allowed_origin(self):
        response = self.client.options("/api/v1/categories", HTTP_ORIGIN="http://app.example.com")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Access-Control-Allow-Origin"], "http://app.example.com")
        self.assertEqual(response["Access-Control-Allow-Credentials"], "true")
        self.assertIn("PATCH", response["Access-Control-Allow-Methods"])

    def test_unknown_origin_gets_no_headers(self):
        response = self.client.get("/api/v1/categories", HTTP_ORIGIN="http://evil.example.com")
        self.assertNotIn("Access-Control-Allow-Origin", response)

    def test_simple_request_is_decorated(self):
        response = self.client.get("/api/v1/categories", HTTP_ORIGIN="http://app.example.com")
        self.assertEqual(response["Access-Control-Allow-Origin"], "http://app.example.com")
        self.assertIn("Origin", response["Vary"])


class ExceptionHandlerTests(TestCase):
    def test_unhandled_error_becomes_json_500(self):
        with self.assertLogs("common.exceptions", level="ERROR"):
            response = api_exception_handler(RuntimeError("boom"), {"view": None})
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {"detail": "Internal server error"})
