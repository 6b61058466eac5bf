from .address_normalizer import AddressNormalizer

__all__ = ["AddressNormalizer"]
