from relay.config import DEFAULT_MAX_CONCURRENCY, DEFAULT_PORT, DEFAULT_TIMEOUT, RelaySettings


def test_from_env_reads_all_values():
    s = RelaySettings.from_env(
        {
            "DIFY_API_URL": "https://api.dify.ai/v1/",
            "DIFY_API_KEY": '"app-123"',
            "DIFY_WORKFLOW_ID": "80b2b6f4",
            "PORT": "9000",
            "RELAY_TIMEOUT": "12.5",
        }
    )
    assert s.base_url == "https://api.dify.ai/v1"
    assert s.api_key == "app-123"
    assert s.workflow_id == "80b2b6f4"
    assert s.port == 9000
    assert s.timeout == 12.5
    assert s.is_complete()


def test_defaults_and_missing():
    s = RelaySettings.from_env({"DIFY_API_KEY": "app-123"})
    assert s.port == DEFAULT_PORT
    assert s.timeout == DEFAULT_TIMEOUT
    assert s.missing() == ["DIFY_API_URL", "DIFY_WORKFLOW_ID"]
    assert not s.is_complete()


def test_blank_values_count_as_missing():
    s = RelaySettings.from_env({"DIFY_API_URL": "  ", "DIFY_API_KEY": "k", "DIFY_WORKFLOW_ID": "w"})
    assert s.missing() == ["DIFY_API_URL"]


def test_invalid_port_falls_back_to_default():
    s = RelaySettings.from_env({"PORT": "eighty"})
    assert s.port == DEFAULT_PORT


def test_max_concurrency():
    assert RelaySettings.from_env({}).max_concurrency == DEFAULT_MAX_CONCURRENCY
    assert RelaySettings.from_env({"RELAY_MAX_CONCURRENCY": "200"}).max_concurrency == 200
    assert RelaySettings.from_env({"RELAY_MAX_CONCURRENCY": "0"}).max_concurrency == 1
