"""
Relay package: forwards an uploaded image to a Dify workflow.

Contains:
- `config` : Immutable `RelaySettings` read from the environment
- `errors` : Error taxonomy mapped onto HTTP responses
- `state`  : Typed `RelayState` definition
- `tools`  : LangChain tools wrapping the two Dify HTTP calls
- `nodes`  : LangGraph node callables operating over `RelayState`
- `graph`  : StateGraph builder, compiled `pipeline` and `analyze_face`
"""
