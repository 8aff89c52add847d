import threading
from concurrent.futures import ThreadPoolExecutor
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from db.database import Base
from models.engagementModels import VideoLike, Follow
from models.userModels import Users, UserRole
from models.videoModels import Video
from services import engagement_service


def test_like_toggle_round_trip(client, db, creator, viewer, make_video, auth_headers):
    video = make_video(creator)
    headers = auth_headers(viewer)

    first = client.post(f"/interactions/like/{video.id}", headers=headers)
    assert first.status_code == 200
    assert first.json() == {"liked": True, "likeCount": 1}

    second = client.post(f"/interactions/like/{video.id}", headers=headers)
    assert second.json() == {"liked": False, "likeCount": 0}

    assert db.query(VideoLike).count() == 0
    assert db.query(Video).filter(Video.id == video.id).one().like_count == 0


def test_like_counts_each_user_once(client, db, creator, viewer, make_user, make_video, auth_headers):
    video = make_video(creator)
    other = make_user("viewer_c")

    client.post(f"/interactions/like/{video.id}", headers=auth_headers(viewer))
    response = client.post(f"/interactions/like/{video.id}", headers=auth_headers(other))

    assert response.json() == {"liked": True, "likeCount": 2}


def test_like_missing_video(client, viewer, auth_headers):
    response = client.post("/interactions/like/999", headers=auth_headers(viewer))
    assert response.status_code == 404
    assert response.json()["code"] == "not_found"


def test_like_requires_authentication(client, creator, make_video):
    video = make_video(creator)
    response = client.post(f"/interactions/like/{video.id}")
    assert response.status_code == 401


def test_duplicate_like_insert_is_a_noop(db, creator, viewer, make_video):
    video = make_video(creator)
    viewer_id, video_id = viewer.id, video.id
    engagement_service.toggle_like(db, viewer_id, video_id)

    # a retried request racing past the existence check
    assert engagement_service.insert_like(db, viewer_id, video_id) is False
    assert engagement_service.sync_like_count(db, video_id) == 1
    db.commit()

    assert db.query(VideoLike).filter(VideoLike.video_id == video_id).count() == 1
    assert db.query(Video).filter(Video.id == video_id).one().like_count == 1


@pytest.fixture
def shared_file_db(tmp_path):
    """A file-backed database that separate threads can open their own connections to."""
    file_engine = create_engine(
        f"sqlite:///{tmp_path / 'concurrency.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=file_engine)
    make_session = sessionmaker(autocommit=False, autoflush=False, bind=file_engine)

    with make_session() as session:
        owner = Users(username="creator_b", email="creator_b@videostream.io", password_hash="x",
                      role=UserRole.CREATOR)
        fan = Users(username="viewer_a", email="viewer_a@videostream.io", password_hash="x")
        session.add_all([owner, fan])
        session.flush()
        video = Video(creator_id=owner.id, title="Race", filename="video-race.mp4", file_size=10)
        session.add(video)
        session.commit()
        ids = (fan.id, video.id)

    yield make_session, ids
    file_engine.dispose()


def run_concurrent_toggles(make_session, user_id, video_id, workers=8):
    def toggle():
        with make_session() as session:
            return engagement_service.toggle_like(session, user_id, video_id)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(toggle) for _ in range(workers)]
        return [future.result(timeout=60) for future in futures]


def test_concurrent_duplicate_likes_store_one_row(shared_file_db, monkeypatch):
    make_session, (user_id, video_id) = shared_file_db
    workers = 8
    barrier = threading.Barrier(workers, timeout=30)
    real_insert = engagement_service.insert_like

    # hold every request after its existence check so they all race on the insert
    def insert_after_everyone_checked(db, uid, vid):
        barrier.wait()
        return real_insert(db, uid, vid)

    monkeypatch.setattr(engagement_service, "insert_like", insert_after_everyone_checked)

    results = run_concurrent_toggles(make_session, user_id, video_id, workers)

    assert all(result.liked for result in results)
    assert all(result.like_count == 1 for result in results)
    with make_session() as session:
        assert session.query(VideoLike).count() == 1
        assert session.query(Video.like_count).filter(Video.id == video_id).scalar() == 1


def test_concurrent_toggles_keep_counter_consistent(shared_file_db):
    make_session, (user_id, video_id) = shared_file_db

    results = run_concurrent_toggles(make_session, user_id, video_id)

    assert all(result.like_count in (0, 1) for result in results)
    with make_session() as session:
        rows = session.query(VideoLike).count()
        assert rows in (0, 1)
        assert session.query(Video.like_count).filter(Video.id == video_id).scalar() == rows


def test_like_toggle_heals_drifted_counter(db, creator, viewer, make_video):
    video = make_video(creator)
    video.like_count = 41
    db.commit()

    result = engagement_service.toggle_like(db, viewer.id, video.id)

    assert result.liked is True
    assert result.like_count == 1


def test_follow_toggle_round_trip(client, creator, viewer, auth_headers):
    headers = auth_headers(viewer)

    first = client.post(f"/interactions/follow/{creator.id}", headers=headers)
    assert first.status_code == 200
    assert first.json() == {"following": True, "followerCount": 1}

    second = client.post(f"/interactions/follow/{creator.id}", headers=headers)
    assert second.json() == {"following": False, "followerCount": 0}


def test_self_follow_rejected_without_state_change(client, db, viewer, auth_headers):
    response = client.post(f"/interactions/follow/{viewer.id}", headers=auth_headers(viewer))

    assert response.status_code == 400
    assert response.json() == {"detail": "Cannot follow yourself", "code": "invalid_operation"}
    assert db.query(Follow).count() == 0


def test_follow_missing_user(client, viewer, auth_headers):
    response = client.post("/interactions/follow/4242", headers=auth_headers(viewer))
    assert response.status_code == 404


def test_duplicate_follow_insert_is_a_noop(db, creator, viewer):
    creator_id, viewer_id = creator.id, viewer.id
    engagement_service.toggle_follow(db, viewer_id, creator_id)

    assert engagement_service.insert_follow(db, viewer_id, creator_id) is False
    assert engagement_service.count_followers(db, creator_id) == 1


def test_following_list(client, creator, viewer, make_user, auth_headers):
    second_creator = make_user("creator_d")
    headers = auth_headers(viewer)
    client.post(f"/interactions/follow/{creator.id}", headers=headers)
    client.post(f"/interactions/follow/{second_creator.id}", headers=headers)

    response = client.get("/interactions/following", headers=headers)

    assert response.status_code == 200
    usernames = [entry["username"] for entry in response.json()["following"]]
    assert usernames == ["creator_d", "creator_b"]
