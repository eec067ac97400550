"""
Walks a running server through signup, profile, addresses and contact.

Run: python scripts/smoke_api.py [base_url]
"""

import asyncio
import json
import sys
import uuid

import httpx

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:5000/api"


def print_section(title):
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)


def print_response(response: httpx.Response):
    print(f"  Status: {response.status_code}")
    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text[:200])


async def main():
    suffix = uuid.uuid4().hex[:8]
    credentials = {
        "username": f"smoke_{suffix}",
        "email": f"smoke_{suffix}@example.com",
        "password": "smoke-password",
    }

    async with httpx.AsyncClient(base_url=BASE_URL, timeout=10.0) as client:
        print_section("Signup")
        response = await client.post("/signup", json=credentials)
        print_response(response)
        if response.status_code != 201:
            print("\n❌ Signup failed")
            return

        token = response.json()["token"]
        headers = {"Authorization": f"Bearer {token}"}

        print_section("Current user")
        print_response(await client.get("/users/me", headers=headers))

        print_section("Add address")
        print_response(await client.post(
            "/addresses/add",
            json={"combinedAddress": "1 Main St, Springfield, IL, USA, 62704"},
            headers=headers,
        ))

        print_section("List addresses")
        print_response(await client.get("/addresses", headers=headers))

        print_section("Contact")
        print_response(await client.post("/contact", json={
            "name": "Smoke Test",
            "email": credentials["email"],
            "message": "Hello from the smoke test",
        }))

    print("\n✅ Done")


if __name__ == "__main__":
    asyncio.run(main())
