"""Screens shown inside the main window stack."""

from __future__ import annotations

from datetime import date

from PySide6.QtCore import QDate, Qt, QTimer, Signal
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import (
    QComboBox,
    QDateEdit,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from wallet_secure.core.images import embedded_image_bytes, image_to_data_uri, is_data_uri
from wallet_secure.core.validation import (
    build_insurance_payload,
    validate_email,
    validate_required_text,
)
from wallet_secure.models.insurance import InsuranceCategory, InsuranceView
from wallet_secure.repositories.audit_repository import (
    AUDIT_ACTIONS,
    AuditRepository,
    period_bounds,
)
from wallet_secure.services.auth_service import AuthService
from wallet_secure.services.insurance_service import InsuranceService
from wallet_secure.ui.formatting import audit_summary, format_date, heading_html, status_text

PREVIEW_SIZE = 320


def _render_image(label: QLabel, image_url: str) -> None:
    if not image_url:
        label.clear()
        label.setText("Sin foto de la póliza")
        return
    if is_data_uri(image_url):
        image_bytes = embedded_image_bytes(image_url)
        pixmap = QPixmap()
        if image_bytes is None or not pixmap.loadFromData(image_bytes):
            label.clear()
            label.setText("Foto no disponible")
            return
        label.setPixmap(
            pixmap.scaled(
                PREVIEW_SIZE,
                PREVIEW_SIZE,
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )
        )
        return
    label.clear()
    label.setText(image_url)


class SplashScreen(QWidget):
    """Brand screen shown for a fixed delay at startup."""

    finished = Signal()

    def __init__(self, delay_ms: int):
        super().__init__()
        self._delay_ms = delay_ms
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self.finished.emit)

        layout = QVBoxLayout(self)
        title = QLabel("<h1>Wallet Secure</h1>")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        subtitle = QLabel("Tus seguros, siempre a mano")
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addStretch(1)
        layout.addWidget(title)
        layout.addWidget(subtitle)
        layout.addStretch(1)

    def start(self) -> None:
        self._timer.start(self._delay_ms)


class AuthScreen(QWidget):
    """Login, registration, and password recovery notice."""

    authenticated = Signal()

    def __init__(self, auth_service: AuthService):
        super().__init__()
        self.auth_service = auth_service
        self._mode = "login"

        layout = QVBoxLayout(self)
        self.heading = QLabel()

        form = QFormLayout()
        self.name_input = QLineEdit()
        self.email_input = QLineEdit()
        self.password_input = QLineEdit()
        self.password_input.setEchoMode(QLineEdit.EchoMode.Password)
        for widget in [self.name_input, self.email_input, self.password_input]:
            widget.returnPressed.connect(self.submit)

        self.name_label = QLabel("Nombre completo")
        self.password_label = QLabel("Contraseña")
        form.addRow(self.name_label, self.name_input)
        form.addRow("Correo electrónico", self.email_input)
        form.addRow(self.password_label, self.password_input)

        self.submit_button = QPushButton()
        self.submit_button.clicked.connect(self.submit)
        self.forgot_button = QPushButton("¿Olvidaste tu contraseña?")
        self.forgot_button.setFlat(True)
        self.forgot_button.clicked.connect(lambda: self._set_mode("forgot"))
        self.toggle_button = QPushButton()
        self.toggle_button.setFlat(True)
        self.toggle_button.clicked.connect(self._toggle_mode)

        self.demo_hint = QLabel("<b>Demo:</b> demo@walletsecure.com / demo123")

        layout.addStretch(1)
        layout.addWidget(QLabel("<h1>Wallet Secure</h1>"))
        layout.addWidget(self.heading)
        layout.addLayout(form)
        layout.addWidget(self.submit_button)
        layout.addWidget(self.forgot_button)
        layout.addWidget(self.toggle_button)
        layout.addWidget(self.demo_hint)
        layout.addStretch(1)

        self._set_mode("login")

    def _toggle_mode(self) -> None:
        if self._mode == "forgot":
            self._set_mode("login")
            return
        self._set_mode("register" if self._mode == "login" else "login")
        self.clear_form()

    def _set_mode(self, mode: str) -> None:
        self._mode = mode
        is_register = mode == "register"
        is_forgot = mode == "forgot"

        self.name_label.setVisible(is_register)
        self.name_input.setVisible(is_register)
        self.password_label.setVisible(not is_forgot)
        self.password_input.setVisible(not is_forgot)
        self.forgot_button.setVisible(mode == "login")
        self.demo_hint.setVisible(not is_forgot)

        if is_forgot:
            self.heading.setText("<h2>Recuperar contraseña</h2>")
            self.submit_button.setText("Enviar enlace")
            self.toggle_button.setText("Volver al inicio de sesión")
        elif is_register:
            self.heading.setText("<h2>Crear cuenta</h2>")
            self.submit_button.setText("Registrarse")
            self.toggle_button.setText("¿Ya tienes cuenta? Inicia sesión")
        else:
            self.heading.setText("<h2>Iniciar sesión</h2>")
            self.submit_button.setText("Iniciar sesión")
            self.toggle_button.setText("¿No tienes cuenta? Regístrate")

    def clear_form(self) -> None:
        self.name_input.clear()
        self.email_input.clear()
        self.password_input.clear()

    def reset(self) -> None:
        self.clear_form()
        self._set_mode("login")

    def submit(self) -> None:
        try:
            if self._mode == "forgot":
                validate_email(self.email_input.text())
                QMessageBox.information(
                    self,
                    "Recuperar contraseña",
                    "Se ha enviado un enlace de recuperación a tu correo",
                )
                self._set_mode("login")
                return

            if self._mode == "login":
                if self.auth_service.login(self.email_input.text(), self.password_input.text()):
                    self.reset()
                    self.authenticated.emit()
                else:
                    QMessageBox.critical(self, "Error", "Credenciales incorrectas")
                return

            name = validate_required_text(self.name_input.text(), "nombre")
            email = validate_email(self.email_input.text())
            password = validate_required_text(self.password_input.text(), "contraseña")
            if self.auth_service.register(email, password, name):
                QMessageBox.information(self, "Completado", "¡Cuenta creada exitosamente!")
                self.reset()
                self.authenticated.emit()
            else:
                QMessageBox.critical(self, "Error", "El usuario ya existe")
        except ValueError as error:
            QMessageBox.critical(self, "Error", str(error))


class HomeScreen(QWidget):
    """Greeting and the list of every policy with its status."""

    add_requested = Signal()
    detail_requested = Signal(str)
    logout_requested = Signal()
    history_requested = Signal()

    def __init__(self, auth_service: AuthService, insurance_service: InsuranceService):
        super().__init__()
        self.auth_service = auth_service
        self.insurance_service = insurance_service

        layout = QVBoxLayout(self)

        header = QHBoxLayout()
        self.greeting = QLabel()
        logout_button = QPushButton("Cerrar sesión")
        logout_button.clicked.connect(lambda: self.logout_requested.emit())
        history_button = QPushButton("Historial")
        history_button.clicked.connect(lambda: self.history_requested.emit())
        header.addWidget(self.greeting)
        header.addStretch(1)
        header.addWidget(history_button)
        header.addWidget(logout_button)

        self.empty_label = QLabel(
            "No tienes seguros guardados.\nPulsa el botón + para añadir uno nuevo"
        )
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self.insurances_table = QTableWidget(0, 5)
        self.insurances_table.setHorizontalHeaderLabels(
            ["Seguro", "Compañía", "Categoría", "Vence", "Estado"]
        )
        self.insurances_table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.insurances_table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.insurances_table.cellClicked.connect(self._on_row_selected)

        add_button = QPushButton("+ Añadir seguro")
        add_button.clicked.connect(lambda: self.add_requested.emit())

        layout.addLayout(header)
        layout.addWidget(QLabel("<h2>Mis Seguros</h2>"))
        layout.addWidget(self.empty_label)
        layout.addWidget(self.insurances_table)
        layout.addWidget(add_button)

    def refresh(self) -> None:
        account = self.auth_service.current_account
        self.greeting.setText(f"Hola, {account.name}" if account else "")
        self._render(self.insurance_service.list_insurances())

    def _render(self, insurances: list[InsuranceView]) -> None:
        self.empty_label.setVisible(not insurances)
        self.insurances_table.setVisible(bool(insurances))
        self.insurances_table.setRowCount(len(insurances))
        for row, insurance in enumerate(insurances):
            title_item = QTableWidgetItem(insurance.title)
            title_item.setData(Qt.ItemDataRole.UserRole, insurance.id)
            self.insurances_table.setItem(row, 0, title_item)
            self.insurances_table.setItem(row, 1, QTableWidgetItem(insurance.company))
            self.insurances_table.setItem(row, 2, QTableWidgetItem(insurance.category.label))
            self.insurances_table.setItem(
                row, 3, QTableWidgetItem(format_date(insurance.expiry_date))
            )
            self.insurances_table.setItem(
                row, 4, QTableWidgetItem(status_text(insurance.expiry_date))
            )

    def _on_row_selected(self, row: int, _column: int) -> None:
        item = self.insurances_table.item(row, 0)
        if item is None:
            return
        self.detail_requested.emit(item.data(Qt.ItemDataRole.UserRole))


class InsuranceFormScreen(QWidget):
    """Add or edit one policy."""

    finished = Signal()

    def __init__(self, insurance_service: InsuranceService):
        super().__init__()
        self.insurance_service = insurance_service
        self._editing_id: str | None = None
        self._image_url = ""

        layout = QVBoxLayout(self)
        self.heading = QLabel()

        self.image_preview = QLabel()
        self.image_preview.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.image_preview.setMinimumHeight(160)
        image_buttons = QHBoxLayout()
        choose_image_button = QPushButton("Subir foto de la póliza")
        choose_image_button.clicked.connect(self.choose_image)
        clear_image_button = QPushButton("Quitar foto")
        clear_image_button.clicked.connect(lambda: self._set_image(""))
        image_buttons.addWidget(choose_image_button)
        image_buttons.addWidget(clear_image_button)

        form = QFormLayout()
        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("Ej: Seguro Coche")
        self.company_input = QLineEdit()
        self.company_input.setPlaceholderText("Ej: Mapfre")
        self.policy_number_input = QLineEdit()
        self.policy_number_input.setPlaceholderText("Ej: POL-2024-001")
        self.phone_input = QLineEdit()
        self.phone_input.setPlaceholderText("Ej: +34 900 100 200")
        self.category_input = QComboBox()
        for category in InsuranceCategory:
            self.category_input.addItem(category.label, category.value)
        self.expiry_input = QDateEdit()
        self.expiry_input.setCalendarPopup(True)
        self.expiry_input.setDisplayFormat("dd/MM/yyyy")

        form.addRow("¿Qué estás asegurando? *", self.title_input)
        form.addRow("¿Con qué compañía? *", self.company_input)
        form.addRow("Número de póliza (opcional)", self.policy_number_input)
        form.addRow("Teléfono de asistencia (opcional)", self.phone_input)
        form.addRow("Categoría *", self.category_input)
        form.addRow("¿Cuándo vence? *", self.expiry_input)

        buttons = QHBoxLayout()
        back_button = QPushButton("Volver")
        back_button.clicked.connect(lambda: self.finished.emit())
        self.save_button = QPushButton()
        self.save_button.clicked.connect(self.save)
        buttons.addWidget(back_button)
        buttons.addStretch(1)
        buttons.addWidget(self.save_button)

        layout.addWidget(self.heading)
        layout.addWidget(self.image_preview)
        layout.addLayout(image_buttons)
        layout.addLayout(form)
        layout.addLayout(buttons)

    def load(self, insurance: InsuranceView | None) -> None:
        """Fill the form for editing, or reset it for a new policy."""
        self._editing_id = insurance.id if insurance else None
        if insurance is None:
            self.heading.setText("<h2>Añadir seguro</h2>")
            self.save_button.setText("Guardar en Wallet Secure")
            self.title_input.clear()
            self.company_input.clear()
            self.policy_number_input.clear()
            self.phone_input.clear()
            self.category_input.setCurrentIndex(0)
            expiry = date.today()
            self._set_image("")
        else:
            self.heading.setText("<h2>Editar seguro</h2>")
            self.save_button.setText("Actualizar en Wallet Secure")
            self.title_input.setText(insurance.title)
            self.company_input.setText(insurance.company)
            self.policy_number_input.setText(insurance.policy_number)
            self.phone_input.setText(insurance.phone_number)
            self.category_input.setCurrentIndex(
                self.category_input.findData(insurance.category.value)
            )
            expiry = insurance.expiry_date
            self._set_image(insurance.image_url)
        self.expiry_input.setDate(QDate(expiry.year, expiry.month, expiry.day))

    def _set_image(self, image_url: str) -> None:
        self._image_url = image_url
        _render_image(self.image_preview, image_url)

    def choose_image(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Foto de la póliza",
            "",
            "Imágenes (*.png *.jpg *.jpeg *.gif *.bmp *.webp)",
        )
        if not path:
            return
        try:
            self._set_image(image_to_data_uri(path))
        except (OSError, ValueError) as error:
            QMessageBox.critical(self, "Error", str(error))

    def save(self) -> None:
        try:
            payload = build_insurance_payload(
                title=self.title_input.text(),
                company=self.company_input.text(),
                policy_number=self.policy_number_input.text(),
                category=self.category_input.currentData(),
                expiry_date=self.expiry_input.date().toPython(),
                phone_number=self.phone_input.text(),
                image_url=self._image_url,
            )
        except ValueError as error:
            QMessageBox.critical(self, "Error", str(error))
            return

        if self._editing_id is None:
            self.insurance_service.create_insurance(payload)
            QMessageBox.information(self, "Completado", "Seguro guardado en Wallet Secure")
        elif self.insurance_service.update_insurance(self._editing_id, payload):
            QMessageBox.information(self, "Completado", "Seguro actualizado correctamente")
        else:
            QMessageBox.critical(self, "Error", "El seguro ya no existe")
        self.finished.emit()


class InsuranceDetailScreen(QWidget):
    """Read-only view of one policy with call, edit, and delete actions."""

    back_requested = Signal()
    edit_requested = Signal(str)

    def __init__(self, insurance_service: InsuranceService):
        super().__init__()
        self.insurance_service = insurance_service
        self._insurance: InsuranceView | None = None

        layout = QVBoxLayout(self)

        header = QHBoxLayout()
        back_button = QPushButton("Volver")
        back_button.clicked.connect(lambda: self.back_requested.emit())
        self.edit_button = QPushButton("Editar")
        self.edit_button.clicked.connect(self._on_edit)
        header.addWidget(back_button)
        header.addWidget(QLabel("<h2>Detalle del seguro</h2>"))
        header.addStretch(1)
        header.addWidget(self.edit_button)

        self.image_label = QLabel()
        self.image_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.title_label = QLabel()
        self.status_label = QLabel()

        details = QFormLayout()
        self.company_label = QLabel()
        self.policy_number_label = QLabel()
        self.category_label = QLabel()
        self.expiry_label = QLabel()
        self.phone_label = QLabel()
        details.addRow("Compañía", self.company_label)
        details.addRow("Número de póliza", self.policy_number_label)
        details.addRow("Categoría", self.category_label)
        details.addRow("Fecha de vencimiento", self.expiry_label)
        details.addRow("Teléfono de asistencia", self.phone_label)

        actions = QHBoxLayout()
        self.call_button = QPushButton("Llamar a asistencia")
        self.call_button.clicked.connect(self.call_assistance)
        self.delete_button = QPushButton("Borrar seguro")
        self.delete_button.clicked.connect(self.delete_insurance)
        actions.addWidget(self.call_button)
        actions.addWidget(self.delete_button)

        self.not_found_label = QLabel("Seguro no encontrado")
        self.not_found_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        layout.addLayout(header)
        layout.addWidget(self.not_found_label)
        layout.addWidget(self.image_label)
        layout.addWidget(self.title_label)
        layout.addWidget(self.status_label)
        layout.addLayout(details)
        layout.addLayout(actions)
        layout.addStretch(1)

    def show_insurance(self, insurance_id: str) -> None:
        insurance = self.insurance_service.get_insurance(insurance_id)
        self._insurance = insurance
        found = insurance is not None

        self.not_found_label.setVisible(not found)
        for widget in [
            self.image_label,
            self.title_label,
            self.status_label,
            self.edit_button,
            self.delete_button,
        ]:
            widget.setVisible(found)
        if insurance is None:
            self.call_button.setVisible(False)
            return

        _render_image(self.image_label, insurance.image_url)
        self.title_label.setText(heading_html(insurance.title))
        self.status_label.setText(status_text(insurance.expiry_date))
        self.company_label.setText(insurance.company)
        self.policy_number_label.setText(insurance.policy_number or "-")
        self.category_label.setText(insurance.category.label)
        self.expiry_label.setText(format_date(insurance.expiry_date, long=True))
        self.phone_label.setText(insurance.phone_number or "-")
        self.call_button.setVisible(bool(insurance.phone_number))

    def _on_edit(self) -> None:
        if self._insurance is not None:
            self.edit_requested.emit(self._insurance.id)

    def call_assistance(self) -> None:
        if self._insurance is None:
            return
        if self._insurance.phone_number:
            QMessageBox.information(
                self, "Asistencia", f"Llamando a {self._insurance.phone_number}..."
            )
        else:
            QMessageBox.critical(self, "Error", "No hay número de teléfono registrado")

    def delete_insurance(self) -> None:
        if self._insurance is None:
            return
        confirm = QMessageBox.question(
            self,
            "¿Estás seguro?",
            "Esta acción no se puede deshacer. Se eliminará permanentemente "
            "este seguro de tu Wallet Secure.",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if confirm != QMessageBox.StandardButton.Yes:
            return
        if self.insurance_service.delete_insurance(self._insurance.id):
            QMessageBox.information(self, "Completado", "Seguro eliminado correctamente")
        self.back_requested.emit()


class AuditLogScreen(QWidget):
    """Filterable audit trail with a purge action."""

    back_requested = Signal()

    def __init__(self, audit_repo: AuditRepository, limit: int = 300):
        super().__init__()
        self.audit_repo = audit_repo
        self.limit = limit
        self._details: list[str] = []

        layout = QVBoxLayout(self)

        filter_row = QHBoxLayout()
        self.action_filter = QComboBox()
        self.action_filter.addItem("Todas las acciones", "")
        for action in AUDIT_ACTIONS:
            self.action_filter.addItem(action, action)

        self.entity_filter = QComboBox()
        self.entity_filter.addItem("Todas las entidades", "")
        self.entity_filter.addItem("insurance", "insurance")
        self.entity_filter.addItem("account", "account")

        self.period_filter = QComboBox()
        self.period_filter.addItem("Todo", "all")
        self.period_filter.addItem("Hoy", "today")
        self.period_filter.addItem("Últimos 7 días", "7d")
        self.period_filter.addItem("Últimos 30 días", "30d")

        self.keyword_input = QLineEdit()
        self.keyword_input.setPlaceholderText("Buscar en el detalle")
        self.keyword_input.returnPressed.connect(self.refresh)

        refresh_button = QPushButton("Buscar")
        refresh_button.clicked.connect(lambda: self.refresh())

        filter_row.addWidget(self.action_filter)
        filter_row.addWidget(self.entity_filter)
        filter_row.addWidget(self.period_filter)
        filter_row.addWidget(self.keyword_input)
        filter_row.addWidget(refresh_button)

        self.table = QTableWidget(0, 6)
        self.table.setHorizontalHeaderLabels(
            ["ID", "Fecha", "Acción", "Entidad", "Objetivo", "Resumen"]
        )
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.table.cellClicked.connect(self._on_row_selected)

        self.detail_view = QPlainTextEdit()
        self.detail_view.setReadOnly(True)

        actions = QHBoxLayout()
        back_button = QPushButton("Volver")
        back_button.clicked.connect(lambda: self.back_requested.emit())
        purge_button = QPushButton("Vaciar historial")
        purge_button.clicked.connect(self.purge)
        actions.addWidget(back_button)
        actions.addStretch(1)
        actions.addWidget(purge_button)

        layout.addWidget(QLabel("<h2>Historial</h2>"))
        layout.addLayout(filter_row)
        layout.addWidget(self.table)
        layout.addWidget(QLabel("Detalle"))
        layout.addWidget(self.detail_view)
        layout.addLayout(actions)

    def refresh(self) -> None:
        date_from, date_to = period_bounds(self.period_filter.currentData(), date.today())
        logs = self.audit_repo.list_logs(
            limit=self.limit,
            action=self.action_filter.currentData() or None,
            entity=self.entity_filter.currentData() or None,
            keyword=self.keyword_input.text().strip() or None,
            date_from=date_from,
            date_to=date_to,
        )
        self._render(logs)

    def _render(self, logs: list[dict]) -> None:
        self._details = []
        self.table.setRowCount(len(logs))
        for row, log in enumerate(logs):
            detail = log.get("detail") or ""
            self._details.append(detail)
            self.table.setItem(row, 0, QTableWidgetItem(str(log["id"])))
            self.table.setItem(
                row, 1, QTableWidgetItem(log["created_at"].strftime("%Y-%m-%d %H:%M:%S"))
            )
            self.table.setItem(row, 2, QTableWidgetItem(log["action"]))
            self.table.setItem(row, 3, QTableWidgetItem(log["entity"]))
            self.table.setItem(row, 4, QTableWidgetItem(log.get("entity_id") or "-"))
            self.table.setItem(row, 5, QTableWidgetItem(audit_summary(detail)))
        self.detail_view.setPlainText("")

    def _on_row_selected(self, row: int, _column: int) -> None:
        if 0 <= row < len(self._details):
            self.detail_view.setPlainText(self._details[row])

    def purge(self) -> None:
        confirm = QMessageBox.question(
            self,
            "Vaciar historial",
            "Se eliminará todo el historial de actividad. ¿Continuar?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if confirm != QMessageBox.StandardButton.Yes:
            return
        self.audit_repo.purge_all_logs()
        self.refresh()
