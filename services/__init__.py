"""
Domain services behind the REST routes.

Modules:
    parcels: ParcelRegistry (create, list, fetch, delete parcels)
    payments: PaymentLedger (payment intents, payment records)
    gateway: PaymentGateway (external payment intents API client)
    tracking: TrackingLog (append-only tracking events)
    users: UserDirectory (login upsert, search, reversible admin toggle)
    riders: RiderDirectory (applications, status workflow, role cascade)

Every service wraps the AsyncSession of the current request; none of them
holds state across requests.

Example:
    registry = ParcelRegistry(session)
    parcel_id = await registry.create_parcel(ParcelCreate(title="Books"))
"""

__all__ = [
    "ParcelRegistry",
    "PaymentLedger",
    "PaymentGateway",
    "TrackingLog",
    "UserDirectory",
    "RiderDirectory",
]
