"""Quart async storefront backed by Stripe test mode.

Requires the quart and dotenv extras::

    pip install "flask-storefront[quart,dotenv]"

Run with::

    python examples/quart_app.py

The endpoints are the same as in the Flask version:

    curl -i -X POST http://localhost:5000/api/checkout_session \\
         -d paymentMethod=klarna
"""

import logging

from dotenv import load_dotenv
from quart import Quart

from flask_storefront import Storefront

load_dotenv()
logging.basicConfig(level=logging.INFO)

app = Quart(__name__)
app.config["STOREFRONT_URL_PREFIX"] = "/shop"

# Storefront detects Quart and registers the async blueprint automatically
ext = Storefront(app)

if __name__ == "__main__":
    app.run(debug=True)
