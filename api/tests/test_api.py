import inspect

from mdd_api.api.v1.endpoints import topics
from mdd_api.core.config import settings
from mdd_api.models import Post

API = settings.api_v1_prefix


def _register(client, username="bob", email="bob@x.com", password="secret1"):
    return client.post(f"{API}/auth/register", json={"username": username, "email": email, "password": password})


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "running"
    assert client.get("/health").json() == {"status": "healthy"}


def test_register_and_login(client):
    response = _register(client)

    assert response.status_code == 201
    body = response.json()
    assert body["user"]["username"] == "bob"
    assert "password" not in body["user"]

    login = client.post(f"{API}/auth/login", json={"identifier": "bob@x.com", "password": "secret1"})
    assert login.status_code == 200
    assert login.json() == {"identifier": "bob@x.com", "message": "Login successful"}


def test_register_duplicate_email_is_bad_request(client):
    _register(client)

    response = _register(client, username="other")

    assert response.status_code == 400
    assert response.json() == {"detail": "User with this email already exists", "kind": "conflict"}


def test_register_rejects_short_password_without_echoing_it(client):
    response = _register(client, password="abc")

    assert response.status_code == 422
    assert "abc" not in response.text


def test_login_failures_look_alike(client):
    _register(client)

    wrong_password = client.post(f"{API}/auth/login", json={"identifier": "bob@x.com", "password": "nope"})
    unknown_user = client.post(f"{API}/auth/login", json={"identifier": "eve@x.com", "password": "nope"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()


def test_user_endpoints(client):
    user_id = _register(client).json()["user"]["id"]

    assert [user["id"] for user in client.get(f"{API}/users").json()] == [user_id]
    assert client.get(f"{API}/users/{user_id}").json()["email"] == "bob@x.com"
    assert client.get(f"{API}/users/by-username/bob").json()["id"] == user_id

    updated = client.put(
        f"{API}/users/{user_id}",
        json={"username": "bob2", "email": "bob2@x.com", "password": "secret2"},
    )
    assert updated.status_code == 200
    assert (updated.json()["username"], updated.json()["email"]) == ("bob2", "bob2@x.com")

    assert client.delete(f"{API}/users/{user_id}").json() == {"message": "User deleted"}
    assert client.get(f"{API}/users/{user_id}").status_code == 404


def test_update_missing_user_is_not_found(client):
    response = client.put(
        f"{API}/users/999",
        json={"username": "ghost", "email": "ghost@x.com", "password": "secret2"},
    )

    assert response.status_code == 404
    assert response.json()["kind"] == "not_found"


def test_topic_crud(client):
    created = client.post(f"{API}/topics", json={"name": " Java "})
    assert created.status_code == 201
    topic_id = created.json()["id"]
    assert created.json()["name"] == "Java"

    renamed = client.put(f"{API}/topics/{topic_id}", json={"name": "Kotlin"})
    assert renamed.json() == {"id": topic_id, "name": "Kotlin"}
    assert client.get(f"{API}/topics").json() == {"topics": [{"id": topic_id, "name": "Kotlin"}]}

    assert client.delete(f"{API}/topics/{topic_id}").json() == {"message": "Topic deleted"}
    assert client.get(f"{API}/topics/{topic_id}").status_code == 404


def test_subscription_flow(client):
    user_id = _register(client).json()["user"]["id"]
    topic_id = client.post(f"{API}/topics", json={"name": "Java"}).json()["id"]

    subscribed = client.post(f"{API}/topics/{topic_id}/subscription", params={"user_id": user_id})
    assert subscribed.json() == {"message": "Subscribed successfully"}
    again = client.post(f"{API}/topics/{topic_id}/subscription", params={"user_id": user_id})
    assert again.status_code == 200

    subscriptions = client.get(f"{API}/topics/subscriptions", params={"user_id": user_id})
    assert subscriptions.json() == {"topics": [{"id": topic_id, "name": "Java"}]}

    unsubscribed = client.delete(f"{API}/topics/{topic_id}/subscription", params={"user_id": user_id})
    assert unsubscribed.json() == {"message": "Unsubscribed successfully"}
    assert client.get(f"{API}/topics/subscriptions", params={"user_id": user_id}).json() == {"topics": []}


def test_subscribe_unknown_user_or_topic_is_not_found(client):
    user_id = _register(client).json()["user"]["id"]

    assert client.post(f"{API}/topics/404/subscription", params={"user_id": user_id}).status_code == 404
    assert client.get(f"{API}/topics/subscriptions", params={"user_id": 999}).status_code == 404


def test_topic_posts_show_author_and_topic_names(client, session, make_user, make_topic):
    bob = make_user("bob")
    topic = make_topic("Java")
    session.add(Post(title="Streams", content="map/filter", author_id=bob.id, topic_id=topic.id))
    session.commit()

    response = client.get(f"{API}/topics/{topic.id}/posts")

    assert response.status_code == 200
    [post] = response.json()["posts"]
    assert (post["title"], post["author_name"], post["topic_name"]) == ("Streams", "bob", "Java")


def test_profile_update_keeps_authored_posts(client, session):
    user_id = _register(client).json()["user"]["id"]
    post = Post(title="Streams", content="map/filter", author_id=user_id)
    session.add(post)
    session.commit()
    post_id = post.id

    response = client.put(
        f"{API}/users/{user_id}",
        json={"username": "bob", "email": "bob@x.com", "password": "newsecret"},
    )

    assert response.status_code == 200
    assert session.get(Post, post_id).author_id == user_id


def test_membership_handlers_run_in_the_threadpool():
    # The per-topic lock blocks; on the event loop it would stall every request
    assert not inspect.iscoroutinefunction(topics.subscribe)
    assert not inspect.iscoroutinefunction(topics.unsubscribe)
