import logging
from typing import Any, Dict, Optional

from bson.binary import Binary
from pymongo.encryption import ClientEncryption

from fle.options.datakey import DataKeyOptions, DataKeyOptionsBuilder
from fle.options.resolve import resolve_data_key_options

logger = logging.getLogger(__name__)


class KMSProviderName:
    """KMS provider names accepted by ClientEncryption.create_data_key"""
    LOCAL = "local"
    AWS = "aws"
    AZURE = "azure"
    GCP = "gcp"


def create_data_key_kwargs(kms_provider: str, options: DataKeyOptions) -> Dict[str, Any]:
    """Map resolved options onto create_data_key keyword arguments.

    Unset fields are left out so pymongo applies its own defaults. The
    local provider has no master key, so one given there is dropped.
    """
    kwargs: Dict[str, Any] = {}
    if options.master_key is not None:
        if kms_provider == KMSProviderName.LOCAL:
            logger.warning("Ignoring master key: not applicable to the local KMS provider")
        else:
            kwargs["master_key"] = options.master_key
    if options.key_alt_names is not None:
        kwargs["key_alt_names"] = options.key_alt_names
    if options.key_material is not None:
        kwargs["key_material"] = options.key_material
    return kwargs


def create_data_key(
    client_encryption: ClientEncryption,
    kms_provider: str,
    *builders: Optional[DataKeyOptionsBuilder],
) -> Binary:
    """Resolve the builders and create a data key through pymongo.

    Returns the _id of the new key document. OptionsError is raised before
    pymongo is called if any option fails to apply.
    """
    options = resolve_data_key_options(*builders)
    kwargs = create_data_key_kwargs(kms_provider, options)
    logger.info(
        "Creating data key",
        extra={"fields": {"kms_provider": kms_provider, "options": options.redacted()}},
    )
    return client_encryption.create_data_key(kms_provider, **kwargs)
