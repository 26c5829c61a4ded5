"""
Entry point unit tests
"""

from unittest.mock import patch

from flask import Flask

import app as app_module
from config import TestingConfig


class TestMain:

    def test_runs_on_configured_port(self, app, monkeypatch):
        """The port comes from the loaded config, not a second environment read"""
        monkeypatch.setattr(TestingConfig, 'PORT', 4123)
        monkeypatch.setenv('PORT', '9999')

        with patch.object(Flask, 'run') as run:
            app_module.main()

        run.assert_called_once_with(host='0.0.0.0', port=4123)
