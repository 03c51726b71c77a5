"""
Integration test script — hits the running service and verifies responses.

Usage:
    # Mock model (no API key needed):
    VISION_ADAPTER=mock uvicorn dishlens.web.app:app --port 8000   (terminal 1)
    python -m dishlens.scripts.integration_test                    (terminal 2)

    # Against a real adapter pass --live; the identify check then only
    # asserts the response shape.
"""

import io
import sys

import cv2
import httpx
import numpy as np

BASE = "http://localhost:8000"
TIMEOUT = 60.0
passed = 0
failed = 0

DISH_KEYS = {"name", "region", "ingredients", "instructions", "funFacts"}


def _sample_jpeg() -> bytes:
    img = np.full((240, 320, 3), (40, 120, 200), dtype=np.uint8)
    cv2.circle(img, (160, 120), 80, (30, 200, 240), -1)
    ok, buf = cv2.imencode(".jpg", img, [cv2.IMWRITE_JPEG_QUALITY, 95])
    return buf.tobytes()


def test(name: str, method: str, path: str, files: dict | None = None, data: dict | None = None,
         status: int = 200, checks: dict | None = None, keys: set | None = None):
    global passed, failed
    url = f"{BASE}{path}"
    checks = checks or {}
    try:
        if method == "GET":
            r = httpx.get(url, timeout=TIMEOUT)
        else:
            r = httpx.post(url, files=files, data=data, timeout=TIMEOUT)

        if r.status_code != status:
            print(f"  FAIL  {name} — HTTP {r.status_code}, expected {status}")
            failed += 1
            return

        body = r.json()
        missing = (keys or set()) - set(body)
        if missing:
            print(f"  FAIL  {name} — missing keys {sorted(missing)}")
            failed += 1
            return
        for key, expected in checks.items():
            actual = body.get(key)
            if actual != expected:
                print(f"  FAIL  {name} — {key}: expected {expected!r}, got {actual!r}")
                failed += 1
                return

        print(f"  OK    {name}")
        passed += 1

    except httpx.ConnectError:
        print(f"  FAIL  {name} — connection refused (is the server running?)")
        failed += 1
    except Exception as e:
        print(f"  FAIL  {name} — {type(e).__name__}: {e}")
        failed += 1


def main():
    global passed, failed
    live = "--live" in sys.argv
    jpeg = _sample_jpeg()

    print(f"\nIntegration tests against {BASE}\n")
    print("--- Health & Status ---")
    test("GET /health", "GET", "/health", checks={"api": True})
    test("GET /status", "GET", "/status", keys={"logs"})

    print("\n--- Bad input ---")
    test("POST /api/identify (no image)", "POST", "/api/identify",
         data={"note": "hello"}, status=400, checks={"error": "No valid image provided"})
    test("POST /api/identify (text field)", "POST", "/api/identify",
         data={"image": "not-a-file"}, status=400, checks={"error": "No valid image provided"})
    test("POST /api/identify (empty file)", "POST", "/api/identify",
         files={"image": ("empty.jpg", io.BytesIO(b""), "image/jpeg")}, status=400)

    print("\n--- Identify ---")
    expected = {} if live else {"name": "Margherita Pizza"}
    test("POST /api/identify (jpeg)", "POST", "/api/identify",
         files={"image": ("dish.jpg", jpeg, "image/jpeg")}, checks=expected, keys=DISH_KEYS)

    print("\n--- Web ---")
    try:
        r = httpx.get(f"{BASE}/", timeout=TIMEOUT)
        ok = r.status_code == 200 and "Dish Identifier" in r.text
    except httpx.HTTPError:
        ok = False
    if ok:
        print("  OK    GET / (index.html)")
        passed += 1
    else:
        print("  FAIL  GET / (index.html)")
        failed += 1

    # Summary
    total = passed + failed
    print(f"\n{'='*40}")
    print(f"  {passed}/{total} passed, {failed} failed")
    print(f"{'='*40}\n")

    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
