"""Top-level application package for the subscription webhook service.

This package contains the FastAPI backend that receives Stripe webhook
events and reconciles local ``User`` / ``Subscription`` state. It includes
the database models, Pydantic schemas for provider payloads, the payment
provider gateway, the persistence store, the webhook processor and the API
routers.

To run the API locally you can execute:

```bash
uvicorn app.api.main:app --reload
```

Configuration values are read from environment variables or a ``.env``
file at the project root.
"""

__all__: list[str] = []
