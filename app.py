"""
Unipet Website Backend
Application Entry Point

This file serves as the entry point for the Flask application.
It uses the application factory pattern defined in the unipet package.
"""

import os

from unipet import create_app

# Create the Flask application using the factory
app = create_app()

if __name__ == '__main__':
    app.run(debug=app.config['APP_ENV'] == 'development', host='0.0.0.0',
            port=int(os.environ.get('PORT', 5000)))
