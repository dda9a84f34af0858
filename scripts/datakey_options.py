#!/usr/bin/env python3
"""Print the create_data_key arguments described by the environment (.env included)."""
import sys
import os
import json
import logging
import argparse

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fle import config
from fle.keyvault.create import create_data_key_kwargs
from fle.logging.json_logger import configure_json_logging
from fle.options.datakey import DataKeyOptions
from fle.options.resolve import OptionsError, resolve_data_key_options

logger = logging.getLogger("datakey_options")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('--provider', default=config.KMS_PROVIDER,
                        help="KMS provider name (default: FLE_KMS_PROVIDER or 'local')")
    args = parser.parse_args(argv)

    configure_json_logging(config.SIEM_ENDPOINT, level=config.LOG_LEVEL.upper())

    try:
        builder = config.datakey_builder_from_env()
        options = resolve_data_key_options(builder)
    except (config.ConfigError, OptionsError) as e:
        logger.error("Invalid data key options: %s", e)
        return 1

    kwargs = create_data_key_kwargs(args.provider, options)
    shown = DataKeyOptions(
        master_key=kwargs.get('master_key'),
        key_alt_names=kwargs.get('key_alt_names'),
        key_material=kwargs.get('key_material'),
    ).redacted()
    print(json.dumps({"kms_provider": args.provider, **shown}, indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
