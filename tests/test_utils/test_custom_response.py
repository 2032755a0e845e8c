import json
import unittest

from common.utils.custom_response import send_custom_response


class TestCustomResponse(unittest.TestCase):
    def test_envelope(self):
        resp = send_custom_response(201, "created", {"id": "b1"})

        self.assertEqual(resp["statusCode"], 201)
        self.assertEqual(resp["headers"]["Content-Type"], "application/json")
        body = json.loads(resp["body"])
        self.assertEqual(body, {"status_code": 201, "message": "created", "data": {"id": "b1"}})

    def test_data_defaults_to_none(self):
        body = json.loads(send_custom_response(404, "missing")["body"])
        self.assertIsNone(body["data"])


if __name__ == "__main__":
    unittest.main()
