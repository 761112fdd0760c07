"""Command line interface for testing contract reads"""
from config import get_settings, SettingsError
from . import (
    create_client, IonicConductors, IonicDesigners, IonicReactionPacks,
    NodeConnectionError, NodeAuthError, RPCError
)

def test_rpc():
    """Test reads against the configured contracts"""
    try:
        settings = get_settings()
    except SettingsError as e:
        print(str(e))
        return

    client = create_client(settings)

    try:
        print("\nTesting contract reads:")
        print("-" * 50)

        if settings.get('conductors_address'):
            print("1. Testing getConductor(1):")
            conductors = IonicConductors.bind(client, settings['conductors_address'])
            conductor = conductors.get_conductor(1)
            print(f"  Success! Conductor {conductor.conductor_id}")
            print(f"  Appraisals: {conductor.stats.appraisal_count}")
            print(f"  Available invites: {conductor.stats.available_invites}")

        if settings.get('designers_address'):
            print("\n2. Testing conductors() on the designers contract:")
            designers = IonicDesigners.bind(client, settings['designers_address'])
            print(f"  Success! Conductors contract: {designers.conductors()}")

        if settings.get('reaction_packs_address'):
            print("\n3. Testing defaultPriceIncrement():")
            packs = IonicReactionPacks.bind(client, settings['reaction_packs_address'])
            print(f"  Success! Increment: {packs.default_price_increment()}")

    except NodeConnectionError as e:
        print("\nFailed to connect to contract state endpoint:")
        print(f"  {str(e)}")

    except NodeAuthError as e:
        print("\nAuthentication failed:")
        print(f"  {str(e)}")
        print("\nPlease check rpc_user and rpc_password in settings.conf")

    except RPCError as e:
        print(f"\nRPC Error [{e.code}] in {e.method}:")
        print(f"  {str(e)}")

if __name__ == "__main__":
    test_rpc()
