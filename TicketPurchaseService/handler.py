# handler.py
"""AWS Lambda handler using Mangum adapter for FastAPI.

API Gateway events are translated to ASGI requests for the
ticket purchase application.
"""

from mangum import Mangum

from TicketPurchaseService.main import app

# lifespan="off" disables ASGI lifespan events which aren't needed in Lambda
handler = Mangum(app, lifespan="off")
