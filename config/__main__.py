"""Command line interface for checking configuration loading"""
from . import get_settings, contract_sources, SettingsError
from pathlib import Path

def main():
    """Display loaded configuration"""
    try:
        settings = get_settings()
    except SettingsError as e:
        print(str(e))
        return

    print("\nSettings Configuration:")
    print("-" * 50)
    for key, value in settings.items():
        print(f"{key}: {value}")

    print("\nIndexed Contracts:")
    print("-" * 50)
    for address, source in contract_sources(settings).items():
        print(f"{source}: {address}")

    # Save example configuration file
    example = Path("settings.conf.example")
    if not example.exists():
        with open(example, "w") as f:
            f.write("""[DEFAULT]
# Contract-state JSON-RPC endpoint (returns decoded contract reads)
rpc_url = http://127.0.0.1:8545
rpc_timeout = 10
# rpc_user =
# rpc_password =

# memory or postgres
store_backend = memory
db_url = postgresql://root@localhost:26257/defaultdb?sslmode=disable

ipfs_gateway = https://ipfs.io
ipfs_timeout = 30
content_workers = 4
content_max_tries = 3

max_event_retries = 5
event_retry_delay = 2

# Store the title in BaseMetadata.description when a description is present
description_from_title = true

log_level = INFO

appraisals_address =
conductors_address =
designers_address =
reaction_packs_address =
nft_address =
access_control_address =
""")

if __name__ == "__main__":
    main()
