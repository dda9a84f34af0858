from dataclasses import dataclass
from typing import Any, Callable, List, Optional


@dataclass
class DataKeyOptions:
    """Resolved options used to create a new data key.

    See the setter methods on DataKeyOptionsBuilder for the meaning of
    each field.
    """
    master_key: Any = None
    key_alt_names: Optional[List[str]] = None
    key_material: Optional[bytes] = None

    def redacted(self) -> dict:
        """Return a log-safe view. Key material is reduced to its length."""
        material = None
        if self.key_material is not None:
            material = f"<{len(self.key_material)} bytes>"
        return {
            "master_key": self.master_key,
            "key_alt_names": self.key_alt_names,
            "key_material": material,
        }


DataKeyOption = Callable[[DataKeyOptions], None]


class DataKeyOptionsBuilder:
    """Collects the options of a create-data-key call.

    Each setter appends a deferred mutation and returns the builder so
    calls can be chained. Nothing is applied until a consumer resolves
    the builder (see fle.options.resolve).
    """

    def __init__(self):
        self.opts: List[DataKeyOption] = []

    def list(self) -> List[DataKeyOption]:
        """Return the setter functions appended so far, in call order."""
        return list(self.opts)

    def set_master_key(self, master_key: Any) -> "DataKeyOptionsBuilder":
        """Set the KMS-specific key used to encrypt the new data key.

        Not applicable to the local KMS provider and should not be given
        there.

        For the aws, azure and gcp providers it is required and must be a
        document. Any "endpoint" or "keyVaultEndpoint" value is a host name
        with an optional port, e.g. "foo.com" or "foo.com:443".

        aws::

            {
                "region": <str>,
                "key": <str>,        # ARN of the AWS customer master key
                "endpoint": <str>,   # optional alternate host
            }

        "endpoint" defaults to "kms.<region>.amazonaws.com".

        azure::

            {
                "keyVaultEndpoint": <str>,
                "keyName": <str>,
                "keyVersion": <str>,  # optional
            }

        "keyVersion" defaults to the key's primary version.

        gcp::

            {
                "projectId": <str>,
                "location": <str>,
                "keyRing": <str>,
                "keyName": <str>,
                "keyVersion": <str>,  # optional
                "endpoint": <str>,    # optional alternate host
            }

        "keyVersion" defaults to the key's primary version and "endpoint"
        to "cloudkms.googleapis.com".

        The value is stored as given. Checking it against the shapes above
        is left to the KMS integration that consumes it.
        """
        def apply(opts: DataKeyOptions) -> None:
            opts.master_key = master_key

        self.opts.append(apply)
        return self

    def set_key_alt_names(self, key_alt_names: Optional[List[str]]) -> "DataKeyOptionsBuilder":
        """Set alternate names used to reference the key.

        A key created with alternate names can be referred to by a unique
        alternate name instead of by its _id. Order is kept and duplicates
        are not removed. A single string is rejected when the options
        are resolved.
        """
        def apply(opts: DataKeyOptions) -> None:
            if key_alt_names is None:
                opts.key_alt_names = None
                return
            if isinstance(key_alt_names, (str, bytes)):
                raise TypeError("key_alt_names must be a list of strings, not a single string")
            opts.key_alt_names = list(key_alt_names)

        self.opts.append(apply)
        return self

    def set_key_material(self, key_material: Optional[bytes]) -> "DataKeyOptionsBuilder":
        """Set custom key material for the new data key.

        If omitted, key material is generated from a cryptographically
        secure random source. "Key material" is used interchangeably with
        "data key" and "Data Encryption Key" (DEK). Empty input is kept
        as empty. Input that is not bytes-like is rejected when the options
        are resolved.
        """
        def apply(opts: DataKeyOptions) -> None:
            if key_material is None:
                opts.key_material = None
                return
            if not isinstance(key_material, (bytes, bytearray, memoryview)):
                raise TypeError(f"key_material must be bytes-like, not {type(key_material).__name__}")
            opts.key_material = bytes(key_material)

        self.opts.append(apply)
        return self


def data_key() -> DataKeyOptionsBuilder:
    """Create a new, empty DataKeyOptionsBuilder."""
    return DataKeyOptionsBuilder()
