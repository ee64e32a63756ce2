"""
Locust Load Test Suite

Drives Stayfront pages against a running marketplace API.

Run scenarios:
  locust -f locustfile.py --tags browse   # Search + detail (cache effectiveness)
  locust -f locustfile.py --tags edge     # Bad booking input
  locust -f locustfile.py                 # All tests
"""

import random
import string
from datetime import date, timedelta
from locust import HttpUser, task, between, tag

# Shared state
LISTING_IDS = []
LOCATIONS = ["Lake Tahoe", "Malibu", "Big Sur", "Austin", ""]


def random_email():
    return f"load_{random.randint(10000, 99999)}@test.com"

def random_name():
    return "Load " + "".join(random.choices(string.ascii_lowercase, k=6))

def random_stay():
    check_in = date.today() + timedelta(days=random.randint(1, 90))
    check_out = check_in + timedelta(days=random.randint(1, 7))
    return check_in.isoformat(), check_out.isoformat()


def remember_listings(resp):
    if resp.status_code == 200:
        for listing in resp.json().get("listings", []):
            if listing["id"] not in LISTING_IDS:
                LISTING_IDS.append(listing["id"])


class BrowsingUser(HttpUser):
    """
    TEST 1: Browsing - search cache effectiveness

    Run twice:
      1. REDIS_ENABLED=true:  locust -f locustfile.py --tags browse -u 100 -r 20 --run-time 60s
      2. REDIS_ENABLED=false: run again

    Compare avg response time and P95 on "/listings [search]".
    """
    wait_time = between(0.1, 0.5)

    @tag("browse")
    @task(10)
    def search(self):
        location = random.choice(LOCATIONS)
        resp = self.client.get("/listings", params={"location": location} if location else None,
            name="/listings [search]")
        remember_listings(resp)

    @tag("browse")
    @task(3)
    def listing_detail(self):
        if LISTING_IDS:
            check_in, check_out = random_stay()
            self.client.get(f"/listings/{random.choice(LISTING_IDS)}",
                params={"checkIn": check_in, "checkOut": check_out, "guests": 2},
                name="/listings/{id}")

    @tag("browse")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 2: Edge cases - Bad booking input

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    Every bad form must be rejected locally (400/422) or sent to /login (303).
    """
    wait_time = between(0.5, 1.5)

    def on_start(self):
        email = random_email()
        self.client.post("/register", json={
            "email": email,
            "name": random_name(),
            "password": "test1234"
        })
        self.client.post("/login", json={"email": email, "password": "test1234"})
        remember_listings(self.client.get("/listings"))

    def _book(self, payload, expected):
        if not LISTING_IDS:
            return
        with self.client.post(f"/listings/{random.choice(LISTING_IDS)}/book",
            json=payload,
            allow_redirects=False,
            name="/listings/{id}/book",
            catch_response=True
        ) as resp:
            if resp.status_code in expected:
                resp.success()
            else:
                resp.failure(f"Expected {expected}, got {resp.status_code}")

    @tag("edge")
    @task
    def reversed_dates(self):
        check_in, check_out = random_stay()
        self._book({"check_in": check_out, "check_out": check_in, "guests": 1}, [400, 303])

    @tag("edge")
    @task
    def zero_guests(self):
        check_in, check_out = random_stay()
        self._book({"check_in": check_in, "check_out": check_out, "guests": 0}, [400, 303])

    @tag("edge")
    @task
    def missing_dates(self):
        self._book({"guests": 1}, [400, 303])

    @tag("edge")
    @task
    def malformed_date(self):
        self._book({"check_in": "next tuesday", "check_out": "2024-13-40"}, [422])


class RealisticUser(HttpUser):
    """
    TEST 3: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

      - Mostly browsing
      - Some bookings
      - Occasional look at "my bookings"
    """
    wait_time = between(1, 3)

    def on_start(self):
        email = random_email()
        self.client.post("/register", json={
            "email": email,
            "name": random_name(),
            "password": "test1234"
        })
        self.client.post("/login", json={"email": email, "password": "test1234"})

    @task(50)
    def browse(self):
        remember_listings(self.client.get("/listings"))

    @task(20)
    def view_listing(self):
        if LISTING_IDS:
            self.client.get(f"/listings/{random.choice(LISTING_IDS)}", name="/listings/{id}")

    @task(10)
    def book(self):
        if LISTING_IDS:
            check_in, check_out = random_stay()
            self.client.post(f"/listings/{random.choice(LISTING_IDS)}/book",
                json={"check_in": check_in, "check_out": check_out, "guests": random.randint(1, 3)},
                allow_redirects=False,
                name="/listings/{id}/book")

    @task(5)
    def my_bookings(self):
        self.client.get("/bookings", allow_redirects=False)
