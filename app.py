"""
Rental PS backend entry point
"""
import os

from dotenv import load_dotenv

load_dotenv()

from rentalps import create_app  # noqa: E402

app = create_app(os.getenv('FLASK_CONFIG') or 'default')


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=int(os.getenv('PORT', 3000)), debug=app.debug)
