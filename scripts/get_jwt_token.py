import os
import sys
from dotenv import load_dotenv

# Load environment variables from your .env file
load_dotenv()

from app.core.config import Settings
from app.api.v1.security import create_access_token

# Prints a token for the example "bearerAuth" scheme.
# JWT_SECRET must match the one the API runs with.


def get_jwt(subject):
    """
    Signs a token for `subject` with JWT_SECRET and prints it.
    """
    if not os.environ.get("JWT_SECRET"):
        print("Error: JWT_SECRET must be set in your .env file.")
        return

    settings = Settings(AUTH_SCHEME="bearerAuth")
    access_token = create_access_token(subject, settings)
    print("\n" + "="*50)
    print(f"JWT for subject {subject}")
    print("Your JWT Access Token is:\n")
    print(access_token)
    print("="*50 + "\n")


if __name__ == "__main__":
    get_jwt(sys.argv[1] if len(sys.argv) > 1 else "admin")
