from .app import SettlementApp, default_client_factory, fetch_details

__all__ = ["SettlementApp", "default_client_factory", "fetch_details"]
