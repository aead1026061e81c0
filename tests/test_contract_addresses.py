"""
Address Resolver Tests
Tests GET /api/contracts/addresses
"""

from datetime import datetime, timedelta, timezone

from models import ContractDeployment, utc_now
from services.deployment_service import ZERO_ADDRESS, record_deployment

ADDRESS_A = "0x" + "a" * 40
ADDRESS_B = "0x" + "b" * 40
ADDRESS_C = "0x" + "c" * 40
DEPLOYER = "0x" + "d" * 40


def _record(db, name, address, deployed_at, network="base", tx_suffix="1"):
    record_deployment(
        db,
        contract_name=name,
        contract_address=address,
        transaction_hash="0x" + tx_suffix.rjust(64, "0"),
        block_number=1,
        gas_used=1,
        deployer_address=DEPLOYER,
        network=network,
        deployed_at=deployed_at,
    )


class TestAddressResolver:
    """Newest record per contract wins; missing contracts resolve to zero"""

    def test_nothing_deployed(self, client):
        response = client.get("/api/contracts/addresses")

        assert response.status_code == 200
        assert response.json() == {
            "network": "base",
            "artistTipping": ZERO_ADDRESS,
            "musicNFTFactory": ZERO_ADDRESS,
            "eventTicketing": ZERO_ADDRESS,
        }

    def test_newest_deployment_wins(self, client, db):
        now = utc_now()
        _record(db, "ArtistTipping", ADDRESS_A, now - timedelta(days=1), tx_suffix="1")
        _record(db, "ArtistTipping", ADDRESS_B, now, tx_suffix="2")
        _record(db, "EventTicketing", ADDRESS_C, now - timedelta(days=3), tx_suffix="3")
        db.commit()

        body = client.get("/api/contracts/addresses").json()

        assert body["artistTipping"] == ADDRESS_B
        assert body["eventTicketing"] == ADDRESS_C
        assert body["musicNFTFactory"] == ZERO_ADDRESS

    def test_same_timestamp_goes_to_last_inserted(self, client, db):
        same_time = datetime(2026, 10, 1, 12, 0, 0)
        _record(db, "MusicNFTFactory", ADDRESS_A, same_time, tx_suffix="1")
        _record(db, "MusicNFTFactory", ADDRESS_B, same_time, tx_suffix="2")
        db.commit()

        body = client.get("/api/contracts/addresses").json()

        assert body["musicNFTFactory"] == ADDRESS_B

    def test_networks_are_separate(self, client, db):
        now = utc_now()
        _record(db, "ArtistTipping", ADDRESS_A, now, network="base", tx_suffix="1")
        _record(db, "ArtistTipping", ADDRESS_B, now + timedelta(minutes=1), network="base-sepolia", tx_suffix="2")
        db.commit()

        assert client.get("/api/contracts/addresses").json()["artistTipping"] == ADDRESS_A
        sepolia = client.get("/api/contracts/addresses", params={"network": "base-sepolia"}).json()
        assert sepolia["network"] == "base-sepolia"
        assert sepolia["artistTipping"] == ADDRESS_B

    def test_deploy_then_resolve(self, client):
        deployed = client.post(
            "/deploy-contracts",
            json={"contracts": ["EventTicketing"], "deployerAddress": DEPLOYER},
        ).json()

        body = client.get("/api/contracts/addresses").json()

        assert body["eventTicketing"] == deployed["deployments"][0]["contractAddress"]

    def test_default_timestamp_is_naive_utc(self, db):
        before = datetime.now(timezone.utc).replace(tzinfo=None)
        _record(db, "ArtistTipping", ADDRESS_A, None)
        db.commit()
        after = datetime.now(timezone.utc).replace(tzinfo=None)

        record = db.query(ContractDeployment).one()

        assert record.deployed_at.tzinfo is None
        assert before <= record.deployed_at <= after
