from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from equipcare.clock import FixedClock, get_clock
from equipcare.database import Base, enable_sqlite_foreign_keys, get_db
from equipcare.main import app
from equipcare.models import Contract, Customer

TODAY = date(2024, 8, 1)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FixedClock(TODAY)


@pytest.fixture
def client(session_factory, clock):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def customer(db):
    customer = Customer(company="Acme Plastics", contact_person="Jordan Lee", phone="555-0100")
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


@pytest.fixture
def make_contract(db, customer):
    def _make(
        contract_type="Quarterly Service",
        contract_period=12,
        contract_start_date=date(2024, 1, 15),
        **extra,
    ):
        contract = Contract(
            customer_id=customer.id,
            equipment_type="Compressor",
            brand="Atlas Copco",
            contract_type=contract_type,
            contract_period=contract_period,
            contract_start_date=contract_start_date,
            **extra,
        )
        db.add(contract)
        db.commit()
        db.refresh(contract)
        return contract

    return _make
