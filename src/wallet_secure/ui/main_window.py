"""Main GUI window switching between the app screens."""

from __future__ import annotations

import logging

from PySide6.QtWidgets import QMainWindow, QStackedWidget

from wallet_secure.core.config import AppConfig
from wallet_secure.repositories.audit_repository import AuditRepository
from wallet_secure.services.auth_service import AuthService
from wallet_secure.services.insurance_service import InsuranceService
from wallet_secure.ui.screens import (
    AuditLogScreen,
    AuthScreen,
    HomeScreen,
    InsuranceDetailScreen,
    InsuranceFormScreen,
    SplashScreen,
)

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """GUI for the insurance wallet.

    Screens that need a session fall back to the auth screen whenever the
    session is gone.
    """

    def __init__(
        self,
        config: AppConfig,
        auth_service: AuthService,
        insurance_service: InsuranceService,
        audit_repo: AuditRepository,
    ):
        super().__init__()
        self.config = config
        self.auth_service = auth_service
        self.insurance_service = insurance_service
        self.audit_repo = audit_repo

        self.setWindowTitle("Wallet Secure")
        self.resize(480, 820)

        self.splash_screen = SplashScreen(config.ui.splash_delay_ms)
        self.auth_screen = AuthScreen(auth_service)
        self.home_screen = HomeScreen(auth_service, insurance_service)
        self.form_screen = InsuranceFormScreen(insurance_service)
        self.detail_screen = InsuranceDetailScreen(insurance_service)
        self.history_screen = AuditLogScreen(audit_repo)

        self.stack = QStackedWidget()
        for screen in [
            self.splash_screen,
            self.auth_screen,
            self.home_screen,
            self.form_screen,
            self.detail_screen,
            self.history_screen,
        ]:
            self.stack.addWidget(screen)
        self.setCentralWidget(self.stack)

        self.splash_screen.finished.connect(self.show_auth)
        self.auth_screen.authenticated.connect(self.show_home)
        self.home_screen.add_requested.connect(self.show_new_form)
        self.home_screen.detail_requested.connect(self.show_detail)
        self.home_screen.logout_requested.connect(self.logout)
        self.home_screen.history_requested.connect(self.show_history)
        self.history_screen.back_requested.connect(self.show_home)
        self.form_screen.finished.connect(self.show_home)
        self.detail_screen.back_requested.connect(self.show_home)
        self.detail_screen.edit_requested.connect(self.show_edit_form)

        self.stack.setCurrentWidget(self.splash_screen)
        self.splash_screen.start()

    def _require_session(self) -> bool:
        if self.auth_service.is_authenticated:
            return True
        self.show_auth()
        return False

    def show_auth(self) -> None:
        if self.auth_service.is_authenticated:
            self.show_home()
            return
        self.auth_screen.reset()
        self.stack.setCurrentWidget(self.auth_screen)

    def show_home(self) -> None:
        if not self._require_session():
            return
        self.home_screen.refresh()
        self.stack.setCurrentWidget(self.home_screen)

    def show_new_form(self) -> None:
        if not self._require_session():
            return
        self.form_screen.load(None)
        self.stack.setCurrentWidget(self.form_screen)

    def show_edit_form(self, insurance_id: str) -> None:
        if not self._require_session():
            return
        insurance = self.insurance_service.get_insurance(insurance_id)
        if insurance is None:
            logger.warning("Edit requested for missing insurance id=%s", insurance_id)
            self.show_home()
            return
        self.form_screen.load(insurance)
        self.stack.setCurrentWidget(self.form_screen)

    def show_detail(self, insurance_id: str) -> None:
        if not self._require_session():
            return
        self.detail_screen.show_insurance(insurance_id)
        self.stack.setCurrentWidget(self.detail_screen)

    def show_history(self) -> None:
        if not self._require_session():
            return
        self.history_screen.refresh()
        self.stack.setCurrentWidget(self.history_screen)

    def logout(self) -> None:
        self.auth_service.logout()
        removed = self.audit_repo.cleanup_old_logs(self.config.logging.retention_days)
        if removed:
            logger.info("Cleaned old audit logs: %d", removed)
        self.show_auth()
