"""Test vectors derived from the recorded account data."""

# Record nonces (group x-coordinates) carried by the two ciphertexts
RECORD_NONCE = 3077450429259593211617823051143573281856129402760267155982965992208217472983
FOREIGN_RECORD_NONCE = 3623676916830487863393240160433052001137242381559504341151695779668457982194

# Raw 32-byte payloads (little-endian hex) behind key and address strings
ADDRESS_X_HEX = "9780627269fb64af84f78309edba9638ba0449241f946522f13572e477276511"
FUNDED_SEED_FIELD_HEX = "1a6ec3dd228a8db73eac1138cdcac77e5ce350b21cb92c48a12e51c3460d3c07"
VIEW_KEY_SCALAR_HEX = "01e03caa6e2ad1158057a1c9214780be49facb37a5f48afcb3771ada1c93f200"

# Private keys generated from edge-case seeds
ZERO_SEED_PRIVATE_KEY = "APrivateKey1zkp1rEPW7jqSRWMCc8ASnN4JLAJrs6Hm2ebXQY9hUpXmAJ3"
# All-0xff seed, reduced modulo the field
MAX_SEED_PRIVATE_KEY = "APrivateKey1zkpJCoTbU43CFCBvBjZaizVyVuy6ZfkaBuE28gWEsBorSbE"

# string_to_field vectors
STRING_FIELD_VECTORS = {
    "": "0field",
    "aleo": "56445857182825field",
    "hello world": "433320227641722851488270519408228694field",
}

# Declared signature of the hello program's main function
HELLO_SIGNATURE = (("u32.public", "u32.private"), ("u32.private",))
