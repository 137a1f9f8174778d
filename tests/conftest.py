import pytest

from kubevet.core.engine import ValidationEngine

# Line numbers matter: several tests assert on them.
VALID_POD = (
    "apiVersion: v1\n"                                  # 1
    "kind: Pod\n"                                       # 2
    "metadata:\n"                                       # 3
    "  name: web-app\n"                                 # 4
    "  namespace: prod\n"                               # 5
    "  labels:\n"                                       # 6
    "    app: web\n"                                    # 7
    "spec:\n"                                           # 8
    "  os:\n"                                           # 9
    "    name: linux\n"                                 # 10
    "  containers:\n"                                   # 11
    "    - name: web\n"                                 # 12
    "      image: registry.bigbrother.io/web:1.0\n"     # 13
    "      ports:\n"                                    # 14
    "        - containerPort: 8080\n"                   # 15
    "          protocol: TCP\n"                         # 16
    "      readinessProbe:\n"                           # 17
    "        httpGet:\n"                                # 18
    "          path: /healthz\n"                        # 19
    "          port: 8080\n"                            # 20
    "      livenessProbe:\n"                            # 21
    "        httpGet:\n"                                # 22
    "          path: /livez\n"                          # 23
    "          port: 8080\n"                            # 24
    "      resources:\n"                                # 25
    "        limits:\n"                                 # 26
    "          cpu: 2\n"                                # 27
    "          memory: 512Mi\n"                         # 28
    "        requests:\n"                               # 29
    "          cpu: 1\n"                                # 30
    "          memory: 256Mi\n"                         # 31
)


@pytest.fixture
def valid_pod() -> str:
    return VALID_POD


@pytest.fixture
def engine() -> ValidationEngine:
    return ValidationEngine()


@pytest.fixture
def messages(engine):
    """Validates text and returns (line, message) pairs."""
    def _run(text: str):
        return [(d.line, d.message) for d in engine.validate_text(text)]
    return _run
