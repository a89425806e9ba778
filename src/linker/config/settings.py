import os
from dotenv import load_dotenv
load_dotenv()
# ---- Solana RPC ----
SOLANA_DEFAULT_RPC_ENDPOINT = "https://api.mainnet-beta.solana.com"
SOLANA_RPC_ENDPOINT = os.environ.get("SOLANA_RPC_ENDPOINT") or SOLANA_DEFAULT_RPC_ENDPOINT

SOLANA_REQUESTS_PER_SEC = float(os.environ.get("SOLANA_REQUESTS_PER_SEC", "4.0"))
SOLANA_TIMEOUT_SEC = 30
SOLANA_MAX_RETRIES = 5

# getSignaturesForAddress paging: 1000 per page, 10 pages -> 10,000 signatures per address
SOLANA_SIGNATURE_PAGE_SIZE = 1000
SOLANA_MAX_SIGNATURE_PAGES = int(os.environ.get("SOLANA_MAX_SIGNATURE_PAGES", "10"))

# ---- Linking ----
LINK_MAX_PATH_DEPTH = 50        # counted in nodes, not edges
PROGRESS_EVERY = 100
