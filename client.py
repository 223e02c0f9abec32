# client.py (manual check against a running server)
import sys

import requests

MAIN = "http://localhost:8000"


def pp(title, resp):
    print(f"\n== {title} ==")
    print(f"status: {resp.status_code}  content-type: {resp.headers.get('Content-Type')}  bytes: {len(resp.content)}")
    print("error page" if "<h1>Error</h1>" in resp.text else "ok")


def main(base=MAIN):
    # --- calculate: resident undergraduate, 12 credits, with orientation ---
    r = requests.post(f"{base}/calculate", data={
        "first_name": "Alice",
        "last_name": "Smith",
        "num_credits": "12",
        "new_student": "on",
        "orientation": "on",
        "student_type": "resident",
        "student_studies": "undergraduate",
    }, timeout=5)
    pp("CALCULATE Alice Smith", r)

    # --- lookup: the record just stored ---
    r = requests.post(f"{base}/lookup", data={"first_name": "Alice", "last_name": "Smith"}, timeout=5)
    pp("LOOKUP Alice Smith", r)

    # --- malformed credit count must come back as the error page ---
    r = requests.post(f"{base}/calculate", data={
        "first_name": "Alice",
        "last_name": "Smith",
        "num_credits": "abc",
        "student_type": "resident",
        "student_studies": "undergraduate",
    }, timeout=5)
    pp("CALCULATE with num_credits=abc", r)


if __name__ == "__main__":
    main(*sys.argv[1:2])
