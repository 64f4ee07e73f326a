"""
Pydantic schemas for request validation and response serialization.

Schemas:
    api: Shared envelopes (insert/delete results, health, errors)
    parcel: Parcel submission and stored parcel
    payment: Payment intents and payment records
    tracking: Tracking events
    user: Login upsert, search projection, role updates
    rider: Rider applications and status updates

Free-form documents (parcels, rider applications, user profiles) use
``extra = "allow"`` so unknown client fields pass through unchanged.
"""

__all__ = [
    "ErrorResponse",
    "InsertResponse",
    "DeleteResponse",
    "ParcelCreate",
    "ParcelResponse",
    "PaymentCreate",
    "PaymentResponse",
    "TrackingEventCreate",
    "UserLogin",
    "RiderApplication",
]
