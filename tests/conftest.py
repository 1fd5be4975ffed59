import pytest
from flask_jwt_extended import create_access_token
from faker import Faker

from showcase import create_app
from showcase.extensions import db
from showcase.models.user import User, UserRole
from showcase.services.generator import seed_plans
from showcase.services.menu import seed_menu

# Initialize Faker for generating test data
fake = Faker()


# Custom pytest marks for organizing tests
def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "db: mark test as database-intensive"
    )
    config.addinivalue_line(
        "markers",
        "auth: mark test as authentication-related"
    )
    config.addinivalue_line(
        "markers",
        "payment: mark test as payment-related"
    )


@pytest.fixture()
def app():
    """
    Fresh application per test: in-memory database, empty rate-limit
    storage, inline notifications.
    """
    app = create_app("testing")

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_user(app):
    def _make_user(email=None, name=None, role=UserRole.USER.value):
        with app.app_context():
            user = User(email=(email or fake.unique.email()).lower(), name=name or fake.name(), role=role)
            db.session.add(user)
            db.session.commit()
            return {"id": user.id, "email": user.email, "name": user.name}
    return _make_user


@pytest.fixture()
def token_for(app):
    """Bearer token whose subject is ``email``, as the auth provider issues them."""
    def _token_for(email, name=None):
        with app.app_context():
            return create_access_token(identity=email, additional_claims={"name": name})
    return _token_for


@pytest.fixture()
def auth_headers(token_for):
    def _auth_headers(email, name=None):
        return {"Authorization": f"Bearer {token_for(email, name)}"}
    return _auth_headers


@pytest.fixture()
def admin_user(make_user):
    return make_user(email="admin@example.com", name="Admin", role=UserRole.ADMIN.value)


@pytest.fixture()
def admin_headers(admin_user, auth_headers):
    return auth_headers(admin_user["email"])


@pytest.fixture()
def user_headers(make_user, auth_headers):
    user = make_user()
    return auth_headers(user["email"])


@pytest.fixture()
def seeded_plans(app):
    with app.app_context():
        seed_plans()


@pytest.fixture
def seeded_menu(app):
    with app.app_context():
        seed_menu()


@pytest.fixture
def order_payload():
    return {
        "customerName": fake.name(),
        "customerPhone": "5551234567",
        "customerEmail": fake.email(),
        "items": [
            {
                "name": "Carne Asada Taco",
                "qty": 2,
                "unitCents": 450,
                "customizations": [{"name": "Extra cheese", "priceCents": 75}],
            },
            {"name": "Horchata", "qty": 1, "unitCents": 300},
        ],
        "tipCents": 200,
    }


@pytest.fixture
def intake_payload():
    return {
        "fullName": fake.name(),
        "email": fake.email(),
        "phone": fake.phone_number(),
        "company": fake.company(),
        "projectType": "ecommerce",
        "projectDescription": fake.paragraph(),
        "goals": fake.sentence(),
        "targetAudience": fake.sentence(),
        "features": ["blog", "checkout"],
        "timeline": "1-3 months",
        "budget": "10k-25k",
        "termsAccepted": True,
    }


@pytest.fixture
def lead_payload():
    return {
        "fullName": fake.name(),
        "email": fake.email().upper(),
        "company": fake.company(),
        "businessType": "restaurant",
        "commissionInterested": True,
        "termsAccepted": True,
    }


@pytest.fixture()
def creator(client, make_user, auth_headers):
    """A user with a creator profile, plus their auth headers."""
    user = make_user(name="Casey Creator")
    headers = auth_headers(user["email"])
    response = client.post("/api/creator/settings", json={"ageRestricted": False}, headers=headers)
    assert response.status_code == 200
    return {"user": user, "headers": headers}
