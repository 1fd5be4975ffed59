from datetime import timedelta

from showcase.extensions import db
from showcase.models.base import utcnow
from showcase.models.creator import Creator, Plan
from showcase.models.user import User


def set_creator_fields(app, user_id, **fields):
    with app.app_context():
        creator = Creator.query.filter_by(user_id=user_id).one()
        for key, value in fields.items():
            setattr(creator, key, value)
        db.session.commit()


class TestSettings:
    def test_defaults_for_non_creator(self, client, user_headers):
        response = client.get("/api/creator/settings", headers=user_headers)

        assert response.status_code == 200
        assert response.get_json() == {"ageRestricted": False}

    def test_update_creates_profile_and_promotes_role(self, app, client, make_user, auth_headers):
        user = make_user()
        headers = auth_headers(user["email"])

        response = client.post("/api/creator/settings", json={"ageRestricted": True}, headers=headers)

        assert response.status_code == 200
        assert response.get_json() == {"ok": True, "ageRestricted": True}
        assert client.get("/api/creator/settings", headers=headers).get_json()["ageRestricted"] is True
        with app.app_context():
            assert db.session.get(User, user["id"]).role == "CREATOR"

    def test_requires_boolean(self, client, user_headers):
        response = client.post("/api/creator/settings", json={"ageRestricted": "yes"}, headers=user_headers)
        assert response.status_code == 400

    def test_requires_token(self, client):
        assert client.get("/api/creator/settings").status_code == 401

    def test_first_request_creates_user_from_token(self, app, client, auth_headers):
        response = client.get("/api/creator/settings", headers=auth_headers("New@Example.com", "New Person"))

        assert response.status_code == 200
        with app.app_context():
            user = User.query.filter_by(email="new@example.com").one()
            assert user.name == "New Person"
            assert user.role == "USER"


class TestPayoutPreferences:
    def test_defaults(self, client, creator):
        data = client.get("/api/creator/payouts/preferences", headers=creator["headers"]).get_json()

        assert data["payoutCadence"] == "MONTHLY"
        assert data["payoutMethod"] == "STRIPE_CONNECT"

    def test_update(self, client, creator):
        response = client.post(
            "/api/creator/payouts/preferences",
            json={"payoutCadence": "WEEKLY", "payoutMethod": "PAYPAL"},
            headers=creator["headers"],
        )

        assert response.status_code == 200
        data = client.get("/api/creator/payouts/preferences", headers=creator["headers"]).get_json()
        assert data["payoutCadence"] == "WEEKLY"
        assert data["payoutMethod"] == "PAYPAL"

    def test_invalid_cadence(self, client, creator):
        response = client.post(
            "/api/creator/payouts/preferences",
            json={"payoutCadence": "DAILY"},
            headers=creator["headers"],
        )
        assert response.status_code == 400

    def test_requires_creator_profile(self, client, user_headers):
        assert client.get("/api/creator/payouts/preferences", headers=user_headers).status_code == 404
        response = client.post(
            "/api/creator/payouts/preferences",
            json={"payoutCadence": "WEEKLY"},
            headers=user_headers,
        )
        assert response.status_code == 404


class TestPayoutRequests:
    def test_defaults_come_from_preferences(self, client, admin_headers, creator):
        client.post(
            "/api/creator/payouts/preferences",
            json={"payoutMethod": "BANK_WIRE"},
            headers=creator["headers"],
        )
        response = client.post("/api/creator/payouts/request", json={}, headers=creator["headers"])

        assert response.status_code == 201
        rows = client.get("/api/admin/payouts/requests", headers=admin_headers).get_json()["requests"]
        assert rows[0]["method"] == "BANK_WIRE"
        assert rows[0]["cadence"] == "MONTHLY"
        assert rows[0]["amountCents"] is None

    def test_negative_amount(self, client, creator):
        response = client.post(
            "/api/creator/payouts/request",
            json={"amountCents": -1},
            headers=creator["headers"],
        )
        assert response.status_code == 400

    def test_non_creator(self, client, user_headers):
        response = client.post("/api/creator/payouts/request", json={}, headers=user_headers)
        assert response.status_code == 404


class TestPayoutPreview:
    def test_default_fee(self, client, creator):
        response = client.get(
            "/api/creator/payouts/preview?grossCents=10000&feesCents=320",
            headers=creator["headers"],
        )
        data = response.get_json()

        assert response.status_code == 200
        assert data["platformFeePercent"] == 15
        assert data["creatorPayoutCents"] == 8228

    def test_launch_promo(self, app, client, creator):
        set_creator_fields(app, creator["user"]["id"], promo_ends_at=utcnow() + timedelta(days=30))

        data = client.get("/api/creator/payouts/preview?grossCents=10000", headers=creator["headers"]).get_json()
        assert data["platformFeePercent"] == 13

    def test_explicit_percent_beats_promo(self, app, client, creator):
        set_creator_fields(
            app,
            creator["user"]["id"],
            revenue_share_percent=20,
            promo_ends_at=utcnow() + timedelta(days=30),
        )

        data = client.get("/api/creator/payouts/preview?grossCents=10000", headers=creator["headers"]).get_json()
        assert data["platformFeePercent"] == 20
        assert data["platformFeeCents"] == 2000

    def test_gross_required(self, client, creator):
        response = client.get("/api/creator/payouts/preview", headers=creator["headers"])
        assert response.status_code == 400


class TestPosts:
    def test_creator_publishes_post(self, client, creator):
        response = client.post(
            "/api/creator/content",
            json={"title": "Hello", "content": "First post", "isPremium": True},
            headers=creator["headers"],
        )

        assert response.status_code == 201
        post = response.get_json()["post"]
        assert post["isPremium"] is True
        assert post["author"]["id"] == creator["user"]["id"]

        posts = client.get(f"/api/creator/{creator['user']['id']}/posts").get_json()["posts"]
        assert [p["id"] for p in posts] == [post["id"]]

    def test_unpublished_posts_hidden(self, client, creator):
        client.post(
            "/api/creator/content",
            json={"content": "Draft", "isPublished": False},
            headers=creator["headers"],
        )
        posts = client.get(f"/api/creator/{creator['user']['id']}/posts").get_json()["posts"]
        assert posts == []

    def test_non_creator_forbidden(self, client, user_headers):
        response = client.post("/api/creator/content", json={"content": "Hi"}, headers=user_headers)
        assert response.status_code == 403

    def test_content_required(self, client, creator):
        response = client.post("/api/creator/content", json={"title": "Empty"}, headers=creator["headers"])
        assert response.status_code == 400

    def test_like_toggles(self, client, creator, user_headers):
        post_id = client.post(
            "/api/creator/content",
            json={"content": "Like me"},
            headers=creator["headers"],
        ).get_json()["post"]["id"]

        liked = client.post("/api/posts/like", json={"postId": post_id}, headers=user_headers).get_json()
        unliked = client.post("/api/posts/like", json={"postId": post_id}, headers=user_headers).get_json()

        assert liked["isLiked"] is True
        assert unliked["isLiked"] is False

    def test_like_unknown_post(self, client, user_headers):
        response = client.post("/api/posts/like", json={"postId": "missing"}, headers=user_headers)
        assert response.status_code == 404


class TestCreatorPlans:
    def test_only_active_plans_by_price(self, app, client, creator):
        with app.app_context():
            profile = Creator.query.filter_by(user_id=creator["user"]["id"]).one()
            db.session.add_all([
                Plan(creator_id=profile.id, name="VIP", price_cents=2000),
                Plan(creator_id=profile.id, name="Fan", price_cents=500),
                Plan(creator_id=profile.id, name="Old", price_cents=100, is_active=False),
            ])
            db.session.commit()

        plans = client.get(f"/api/creator/{creator['user']['id']}/plans").get_json()["plans"]
        assert [p["name"] for p in plans] == ["Fan", "VIP"]
