"""
Streamlit Frontend for FinTrack

This is the shell around the ledger. It only reads input, calls the
session, and renders results; every rule lives in the fintrack package.

DESIGN PRINCIPLES:
1. One ledger session per browser session (kept in st.session_state)
2. Errors come back as values and are shown in plain language
3. Three failed logins end the session
4. Nothing is stored: closing the tab discards everything
"""

import streamlit as st

from fintrack.audit import AuditLogger
from fintrack.config import get_settings
from fintrack.models.account import LedgerError, LedgerErrorKind
from fintrack.models.money import format_currency
from fintrack.orchestrator import LoginFlow, create_app_components
from fintrack.services.ledger import LedgerSession
from fintrack.validation import build_label


st.set_page_config(
    page_title="FinTrack",
    page_icon="💰",
    layout="centered",
    initial_sidebar_state="expanded",
)


ERROR_MESSAGES = {
    LedgerErrorKind.INVALID_NAME: "❌ Invalid name!",
    LedgerErrorKind.INVALID_EMAIL: "❌ Invalid email!",
    LedgerErrorKind.INVALID_AMOUNT: "❌ Invalid amount!",
    LedgerErrorKind.EMPTY_DESTINATION: "❌ Transfer destination cannot be empty!",
    LedgerErrorKind.EMPTY_ORIGIN: "❌ Origin of the money cannot be empty!",
    LedgerErrorKind.INSUFFICIENT_FUNDS: "❌ Insufficient funds!",
    LedgerErrorKind.NOT_LOGGED_IN: "❌ No user is logged in!",
}

MENU = [
    "💰 Check Balance",
    "💸 Transfer",
    "💵 Receive Money",
    "📋 History",
    "👤 My Profile",
    "🔄 Logout",
    "🚪 Exit",
]


def get_components() -> tuple[LedgerSession, LoginFlow]:
    """Get or create this browser session's ledger components."""
    if "ledger_session" not in st.session_state:
        session, login_flow, audit_logger = create_app_components()
        st.session_state.ledger_session = session
        st.session_state.login_flow = login_flow
        st.session_state.audit_logger = audit_logger
        st.session_state.closed = False
    return st.session_state.ledger_session, st.session_state.login_flow


def render_error(error: LedgerError) -> None:
    """Show a ledger error with its hints."""
    lines = [ERROR_MESSAGES.get(error.kind, f"❌ {error.message}")]
    if error.kind == LedgerErrorKind.INSUFFICIENT_FUNDS:
        lines.append(error.message)
    for issue in error.issues:
        lines.append(f"• {issue.message}")
        if issue.suggested_fix:
            lines.append(f"  💡 {issue.suggested_fix}")
    st.error("\n\n".join(lines))


def render_goodbye() -> None:
    st.title("🚪 FinTrack closed")
    st.markdown(
        """
        💰 Thank you for using FinTrack!

        🔒 Your session was closed and nothing was stored.
        """
    )
    if st.button("Start over"):
        for key in ("ledger_session", "login_flow", "closed"):
            st.session_state.pop(key, None)
        st.rerun()


def render_login_page(login_flow: LoginFlow) -> None:
    """Render the login form."""
    st.title("🔐 Welcome to FinTrack")
    st.markdown(
        """
        🔹 Manage your finances simply
        🔹 Make transfers safely
        🔹 Follow your balance in real time
        """
    )

    with st.form("login"):
        name = st.text_input("👤 Full name")
        email = st.text_input("📧 Email")
        submitted = st.form_submit_button("Enter", type="primary")

    if not submitted:
        st.caption(f"Attempts remaining: {login_flow.attempts_remaining}")
        return

    attempt = login_flow.attempt(name, email)
    if attempt.success:
        st.rerun()

    if attempt.error:
        render_error(attempt.error)
    if attempt.exhausted:
        st.error("🚫 Maximum number of attempts exceeded!")
        st.session_state.closed = True
        st.rerun()
    else:
        st.warning(f"⚠️ Try again ({attempt.attempts_remaining} attempts remaining)")


def render_balance(session: LedgerSession) -> None:
    st.header("💰 Balance")
    # Every inquiry is recorded, so only query on an explicit click
    if not st.button("Check balance", type="primary"):
        return
    result = session.balance()
    if not result.success:
        render_error(result.error)
        return
    view = result.value
    st.metric(
        label=f"👤 {view.name}",
        value=format_currency(view.balance, session.settings.currency_symbol),
    )
    st.caption(
        "🕐 Last update: "
        + view.last_access_at.strftime(session.settings.display_datetime_format)
    )


def render_transfer(session: LedgerSession) -> None:
    st.header("💸 Transfer")
    symbol = session.settings.currency_symbol

    with st.form("transfer", clear_on_submit=True):
        amount = st.text_input(f"💰 Amount ({symbol})")
        destination = st.text_input("🏦 Send to")
        description = st.text_input("📝 Description (optional)")
        submitted = st.form_submit_button("Transfer", type="primary")

    if not submitted:
        return

    result = session.transfer(amount, build_label(destination, description))
    if not result.success:
        render_error(result.error)
        return
    receipt = result.value
    st.success(
        f"✅ Transfer completed!\n\n"
        f"💸 Amount: {format_currency(receipt.amount, symbol)}\n\n"
        f"🎯 To: {receipt.destination}\n\n"
        f"💰 New balance: {format_currency(receipt.new_balance, symbol)}"
    )


def render_receive(session: LedgerSession) -> None:
    st.header("💵 Receive Money")
    symbol = session.settings.currency_symbol

    with st.form("receive", clear_on_submit=True):
        amount = st.text_input(f"💰 Amount received ({symbol})")
        origin = st.text_input("👤 Received from")
        description = st.text_input("📝 Description (optional)")
        submitted = st.form_submit_button("Receive", type="primary")

    if not submitted:
        return

    result = session.receive(amount, build_label(origin, description))
    if not result.success:
        render_error(result.error)
        return
    receipt = result.value
    st.success(
        f"✅ Money received!\n\n"
        f"💵 Amount: {format_currency(receipt.amount, symbol)}\n\n"
        f"📤 From: {receipt.origin}\n\n"
        f"💰 New balance: {format_currency(receipt.new_balance, symbol)}"
    )


def render_history(session: LedgerSession) -> None:
    st.header("📋 Transaction History")
    result = session.history()
    if not result.success:
        render_error(result.error)
        return
    if not result.value:
        st.info("📭 No transactions yet.")
        return
    fmt = session.settings.display_datetime_format
    for i, entry in enumerate(result.value, start=1):
        st.markdown(f"{i}. {entry.display(fmt)}")


def render_profile(session: LedgerSession) -> None:
    st.header("👤 My Profile")
    account = session.current_account
    if account is None:
        st.error(ERROR_MESSAGES[LedgerErrorKind.NOT_LOGGED_IN])
        return
    for line in account.profile_lines(
        session.settings.currency_symbol,
        session.settings.display_datetime_format,
    ):
        st.markdown(line)


def render_logout(session: LedgerSession, login_flow: LoginFlow) -> None:
    st.header("🔄 Logout")
    account = session.current_account
    name = account.name if account else ""
    st.markdown("Do you want to log in as another user afterwards?")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Logout and switch user", type="primary"):
            session.logout()
            login_flow.reset()
            st.toast(f"👋 Session closed for {name}")
            st.rerun()
    with col2:
        if st.button("Logout and exit"):
            session.logout()
            st.session_state.closed = True
            st.rerun()


def render_debug_panel(audit_logger: AuditLogger) -> None:
    """Recent audit events, shown only in debug mode."""
    with st.sidebar.expander("🛠️ Audit trail"):
        if audit_logger.storage is None:
            st.caption("No audit sink configured")
            return
        for event in reversed(audit_logger.storage.list_events(limit=10)):
            st.caption(
                f"{event.timestamp:%H:%M:%S} {event.event_type.value}: "
                f"{event.description}"
            )


def main():
    """Main application entry point."""
    session, login_flow = get_components()

    if st.session_state.closed:
        render_goodbye()
        return

    if not session.is_logged_in:
        render_login_page(login_flow)
        return

    st.sidebar.title("💰 FinTrack")
    st.sidebar.markdown(f"👤 {session.current_account.name}")
    st.sidebar.markdown("---")
    page = st.sidebar.radio("Main menu", MENU, index=0)

    app_settings = get_settings().app
    st.sidebar.caption(f"Environment: {app_settings.app_environment}")
    if app_settings.debug_mode:
        render_debug_panel(st.session_state.audit_logger)

    if page == MENU[0]:
        render_balance(session)
    elif page == MENU[1]:
        render_transfer(session)
    elif page == MENU[2]:
        render_receive(session)
    elif page == MENU[3]:
        render_history(session)
    elif page == MENU[4]:
        render_profile(session)
    elif page == MENU[5]:
        render_logout(session, login_flow)
    elif page == MENU[6]:
        session.logout()
        st.session_state.closed = True
        st.rerun()


if __name__ == "__main__":
    main()
