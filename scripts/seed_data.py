#!/usr/bin/env python3
"""
Seed script to populate the database with demo users, posts and tags.

Работает через API, поэтому сервер должен быть запущен:
    python init_db.py --reset
    uvicorn juicebox.main:app
    python scripts/seed_data.py
"""

from urllib.parse import quote

import requests

API_URL = "http://localhost:8000/api/v1"
API_KEY = "dev-api-key-change-in-production"
HEADERS = {"X-API-Key": API_KEY, "Content-Type": "application/json"}

USERS = [
    {
        "username": "albert",
        "password": "bertie99",
        "name": "Al Bert",
        "location": "Sidney, Australia",
    },
    {
        "username": "sandra",
        "password": "2sandy4me",
        "name": "Just Sandra",
        "location": "Ain't tellin'",
    },
    {
        "username": "glamgal",
        "password": "soglam",
        "name": "Joshua",
        "location": "Upper East Side",
    },
]

# Posts keyed by author username
POSTS = {
    "albert": {
        "title": "First Post",
        "content": (
            "This is my first post. I hope I love writing blogs "
            "as much as I love writing them."
        ),
        "tags": ["#happy", "#youcandoanything"],
    },
    "sandra": {
        "title": "How does this work?",
        "content": "Seriously, does this even do anything?",
        "tags": ["#happy", "#worst-day-ever"],
    },
    "glamgal": {
        "title": "Living the Glam Life",
        "content": "Do you even? I swear that half of you are posing.",
        "tags": ["#happy", "#youcandoanything", "#catmandoeverything"],
    },
}


def create_user(user_data):
    """Create a user via API. Returns None if the username is taken."""
    response = requests.post(f"{API_URL}/users", headers=HEADERS, json=user_data)
    if response.status_code == 201:
        return response.json()
    print(f"Error creating user {user_data['username']}: {response.text}")
    return None


def create_post(post_data, author_id):
    """Create a post via API."""
    payload = {**post_data, "author_id": author_id}
    response = requests.post(f"{API_URL}/posts", headers=HEADERS, json=payload)
    if response.status_code == 201:
        return response.json()
    print(f"Error creating post {post_data['title']}: {response.text}")
    return None


def get_posts_by_tag(tag_name):
    """Get active posts labeled with tag_name."""
    response = requests.get(f"{API_URL}/tags/{quote(tag_name, safe='')}/posts", headers=HEADERS)
    response.raise_for_status()
    return response.json()


def main():
    print("=" * 60)
    print("Seeding database with demo users and posts")
    print("=" * 60)

    print("\n👤 Creating users...")
    user_ids = {}
    for user_data in USERS:
        user = create_user(user_data)
        if user:
            user_ids[user_data["username"]] = user["id"]
            print(f"  ✅ {user_data['username']} (id={user['id']})")

    print("\n📝 Creating posts...")
    total_posts = 0
    for username, post_data in POSTS.items():
        if username not in user_ids:
            print(f"  ⚠️ User {username} not found, skipping post")
            continue

        post = create_post(post_data, user_ids[username])
        if post:
            total_posts += 1
            tags = ", ".join(tag["name"] for tag in post["tags"])
            print(f"  ✅ {post['title']} [{tags}]")

    print("\n🔎 Posts tagged #happy:")
    for post in get_posts_by_tag("#happy"):
        print(f"  - {post['title']} by {post['author']['username']}")

    print("\n" + "=" * 60)
    print(f"✅ Done! Created {len(user_ids)} users and {total_posts} posts")
    print("=" * 60)


if __name__ == "__main__":
    main()
