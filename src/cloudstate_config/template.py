"""Example config.yaml document for stateful service ConfigMaps.

EXAMPLE_CONFIG_DOCUMENT is written into a service's ConfigMap when the
ConfigMap is first created. Every setting is commented out, so it changes
nothing; it documents what can be overridden. To override a default, edit
the ConfigMap, uncomment the setting and change its value.

No line may end in whitespace. kubectl only renders a ConfigMap value as a
YAML block scalar when it has no trailing spaces; otherwise it prints one
quoted string with escaped newlines and the layout below is lost.
"""

from __future__ import annotations

EXAMPLE_CONFIG_DOCUMENT = """\
# Settings for the autoscaler
autoscaler:

  # Whether the autoscaler should be enabled or not
  # enabled: true

  # The minimum number of replicas to scale down to
  # minReplicas: 1

  # The maximum number of replicas to scale up to
  # maxReplicas: 10

  # The average CPU utilization threshold, at which point the autoscaler will
  # scale up or down, as a percentage of requested CPU
  # cpuUtilizationThreshold: 80

# Settings for the proxy
proxy:

  # The proxy image. Setting this overrides the image the operator selects
  # for the configured stateful store.
  # image: cloudstateio/cloudstate-proxy-postgres:latest

  # The image pull policy: Always, IfNotPresent or Never
  # imagePullPolicy: IfNotPresent

  # Proxy resource requirements
  resources:

    # The CPU request
    # cpuRequest: 400m

    # The CPU limit. Not set by default; setting one is rarely a good idea
    # cpuLimit:

    # The memory request
    # memoryRequest: 512Mi

    # The memory limit
    # memoryLimit: 512Mi

  # The max heap size for the proxy JVM
  # maxHeapSize: 256m

  # The initial heap size for the proxy JVM
  # initialHeapSize: 256m

# Settings for the user function
userFunction:

  # User function resource requirements
  resources:

    # The CPU request
    # cpuRequest: 400m

    # The CPU limit. Not set by default; setting one is rarely a good idea
    # cpuLimit:

    # The memory request
    # memoryRequest: 512Mi

    # The memory limit
    # memoryLimit: 512Mi
"""


def render_example_document() -> str:
    """Return the fully commented example config.yaml document.

    Returns:
        Constant YAML text with every setting commented out.
    """
    return EXAMPLE_CONFIG_DOCUMENT
