"""Basic Flask storefront backed by Stripe test mode.

Put your Stripe test credentials in a ``.env`` file next to this script::

    STRIPE_SECRET_KEY=sk_test_...
    STRIPE_PRICE_ID=price_...

Run with::

    python examples/basic_app.py

Then open http://localhost:5000/ in your browser, or use curl:

    # Start a checkout offering only card payments (prints the 303 Location)
    curl -i -X POST http://localhost:5000/api/checkout_session \\
         -d paymentMethod=card

    # Any other verb is rejected
    curl -i http://localhost:5000/api/checkout_session
"""

import logging

from dotenv import load_dotenv
from flask import Flask

from flask_storefront import Storefront

load_dotenv()
logging.basicConfig(level=logging.INFO)

app = Flask(__name__)

# Reads STRIPE_SECRET_KEY and STRIPE_PRICE_ID from the environment
ext = Storefront(app)

if __name__ == "__main__":
    app.run(debug=True)
