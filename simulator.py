"""Interactive CLI simulator — exercise the OTP flow without real providers."""

import asyncio

import httpx

from otp_service.config import Settings
from otp_service.gateways.console import ConsoleEmailGateway, ConsoleSMSGateway
from otp_service.main import create_app

BLUE = "\033[94m"
GREEN = "\033[92m"
RED = "\033[91m"
YELLOW = "\033[93m"
DIM = "\033[2m"
BOLD = "\033[1m"
RESET = "\033[0m"

BASE_URL = "http://127.0.0.1:8000"


async def main() -> None:
    print(f"\n{BOLD}{'=' * 52}")
    print(f"  🔐  OTP Service — Simulator")
    print(f"{'=' * 52}{RESET}\n")

    print(f"{DIM}Commands: 'sms' / 'email' to request a code, or type a code to verify{RESET}")
    print(f"{DIM}          'switch' to change contact, 'quit' to exit{RESET}")
    print(f"{DIM}          Delivered messages are echoed below{RESET}\n")

    contact = input(f"{YELLOW}Enter contact (phone or email): {RESET}").strip()
    if not contact:
        contact = "+15551234567"
    print(f"{DIM}Simulating as {contact}{RESET}\n")

    # ── Build the app with log-only gateways ─────────────
    sms, email = ConsoleSMSGateway(), ConsoleEmailGateway()
    app = create_app(Settings(), sms_gateway=sms, email_gateway=email)

    # ── Start the API in the background ──────────────────
    import uvicorn

    config = uvicorn.Config(app, host="127.0.0.1", port=8000, log_level="warning")
    server = uvicorn.Server(config)
    server_task = asyncio.create_task(server.serve())

    # Give the server a moment to start
    await asyncio.sleep(0.5)

    async with httpx.AsyncClient(base_url=BASE_URL) as client:
        while True:
            try:
                user_input = input(f"{BLUE}{BOLD}You:{RESET} ").strip()
            except (KeyboardInterrupt, EOFError):
                print(f"\n{DIM}Goodbye!{RESET}")
                break

            if not user_input:
                continue

            command = user_input.lower()
            if command == "quit":
                print(f"{DIM}Goodbye!{RESET}")
                break

            if command == "switch":
                contact = input(f"{YELLOW}New contact: {RESET}").strip()
                print(f"{DIM}Switched to {contact}{RESET}\n")
                continue

            if command in ("sms", "email"):
                resp = await client.post(
                    "/api/request-otp", json={"contact": contact, "method": command}
                )
                outbox = sms.sent if command == "sms" else email.sent
                if resp.status_code == 200 and outbox:
                    print(f"{DIM}  (delivered) {outbox[-1][-1]}{RESET}")
            else:
                resp = await client.post(
                    "/api/verify-otp", json={"contact": contact, "otp": user_input}
                )

            data = resp.json()
            if resp.status_code == 200:
                print(f"{GREEN}{BOLD}Service:{RESET} {data['message']}\n")
            else:
                print(f"{RED}{BOLD}Service ({resp.status_code}):{RESET} {data['error']}\n")

    # Shut down the background server
    server.should_exit = True
    await server_task


if __name__ == "__main__":
    asyncio.run(main())
