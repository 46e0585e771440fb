"""Poll the /api/health endpoint and exit non-zero when the service is unhealthy.

Usage: python scripts/health_check.py [base_url]
"""
import os
import sys

import requests

DEFAULT_URL = os.environ.get('HEALTH_CHECK_URL', 'http://localhost:5000')


def check(base_url, timeout=5):
    url = base_url.rstrip('/') + '/api/health'
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.exceptions.RequestException as e:
        print(f'Health check failed: {e}')
        return False

    try:
        body = resp.json()
    except ValueError:
        body = {}

    print(f'{url} -> {resp.status_code} {body.get("status", "unknown")}')
    for name, status in body.get('checks', {}).items():
        print(f'  {name}: {status}')
    return resp.status_code == 200


if __name__ == '__main__':
    target = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_URL
    sys.exit(0 if check(target) else 1)
