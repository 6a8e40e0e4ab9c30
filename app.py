"""
Portfolio Site
==============

Run with:
    python app.py

Visit:
    http://localhost:5000        - Portfolio
    http://localhost:5000/admin  - Admin panel
"""

import logging

from flask import Flask

from portfolio_cms import PortfolioCMS
from portfolio_cms.core.config import Config

logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

app = Flask(__name__)
app.config['SECRET_KEY'] = Config.SECRET_KEY

# Registers the admin panel and the public site
portfolio = PortfolioCMS(app, {'brand_name': Config.BRAND_NAME})


if __name__ == '__main__':
    print("\n" + "=" * 60)
    print(f"{Config.BRAND_NAME}")
    print("=" * 60)
    print(f"Site:            http://localhost:{Config.port}")
    print(f"Admin Panel:     http://localhost:{Config.port}/admin")
    print(f"Admin Login:     http://localhost:{Config.port}/admin/login")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.port, debug=True)
