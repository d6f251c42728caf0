"""Run a quick smoke test against the app.

Uses FastAPI's TestClient to hit the health check and the listing
endpoints and prints the responses.
Usage: python scripts/smoke_request.py
"""

import sys
import os

# Ensure backend folder is on sys.path so `simple_api` can be imported
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fastapi.testclient import TestClient
from simple_api.main import app


def main():
    client = TestClient(app)
    for path in ('/health', '/departments/', '/students/'):
        resp = client.get(path)
        print(path, 'STATUS:', resp.status_code)
        print('JSON:', resp.json())


if __name__ == '__main__':
    main()
