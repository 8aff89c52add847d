from models.videoModels import PrivacySetting


def test_public_profile_counts(client, creator, viewer, make_video, auth_headers):
    make_video(creator, title="Public")
    make_video(creator, title="Members", privacy=PrivacySetting.SUBSCRIBER_ONLY)
    client.post(f"/users/{creator.id}/subscribe", headers=auth_headers(viewer))

    response = client.get(f"/users/{creator.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "creator_b"
    assert body["role"] == "creator"
    assert body["videoCount"] == 1
    assert body["subscriberCount"] == 1


def test_public_profile_missing(client):
    assert client.get("/users/999").status_code == 404


def test_subscribe_is_follow_toggle(client, creator, viewer, auth_headers):
    headers = auth_headers(viewer)

    first = client.post(f"/users/{creator.id}/subscribe", headers=headers).json()
    assert first == {"subscribed": True, "message": "Subscribed successfully", "subscriberCount": 1}

    # same ledger as /interactions/follow
    second = client.post(f"/interactions/follow/{creator.id}", headers=headers).json()
    assert second == {"following": False, "followerCount": 0}


def test_subscribe_to_self_rejected(client, creator, auth_headers):
    response = client.post(f"/users/{creator.id}/subscribe", headers=auth_headers(creator))
    assert response.status_code == 400


def test_update_own_profile(client, viewer, auth_headers):
    response = client.put(
        f"/users/{viewer.id}",
        headers=auth_headers(viewer),
        json={"display_name": "Viewer A", "bio": "I watch things"},
    )

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["displayName"] == "Viewer A"
    assert user["bio"] == "I watch things"

    # omitted fields stay as they are
    response = client.put(f"/users/{viewer.id}", headers=auth_headers(viewer), json={"bio": "Changed"})
    assert response.json()["user"]["displayName"] == "Viewer A"


def test_update_profile_blank_values_keep_current(client, viewer, auth_headers):
    headers = auth_headers(viewer)
    client.put(f"/users/{viewer.id}", headers=headers, json={"display_name": "Viewer A", "bio": "I watch things"})

    response = client.put(f"/users/{viewer.id}", headers=headers, json={"display_name": "", "bio": "  "})

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["displayName"] == "Viewer A"
    assert user["bio"] == "I watch things"


def test_update_other_profile_forbidden(client, creator, viewer, auth_headers):
    response = client.put(f"/users/{creator.id}", headers=auth_headers(viewer), json={"bio": "hacked"})
    assert response.status_code == 403


def test_update_profile_validation(client, viewer, auth_headers):
    response = client.put(f"/users/{viewer.id}", headers=auth_headers(viewer), json={"bio": "x" * 501})
    assert response.status_code == 400


def test_subscriptions_and_subscribers(client, creator, viewer, make_video, auth_headers):
    make_video(creator, title="Public")
    make_video(creator, title="Members", privacy=PrivacySetting.SUBSCRIBER_ONLY)
    client.post(f"/users/{creator.id}/subscribe", headers=auth_headers(viewer))

    subscriptions = client.get(f"/users/{viewer.id}/subscriptions", headers=auth_headers(viewer))
    assert subscriptions.status_code == 200
    [entry] = subscriptions.json()["subscriptions"]
    assert entry["username"] == "creator_b"
    assert entry["videoCount"] == 1

    subscribers = client.get(f"/users/{creator.id}/subscribers", headers=auth_headers(creator))
    assert [s["username"] for s in subscribers.json()["subscribers"]] == ["viewer_a"]

    peek = client.get(f"/users/{creator.id}/subscribers", headers=auth_headers(viewer))
    assert peek.status_code == 403
