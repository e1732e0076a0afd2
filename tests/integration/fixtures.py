"""
Integration Test Fixtures

Explicit notification payloads for deterministic testing.
All fixtures are explicit - no random generation.
"""

from monit_collector import Collector, CollectorConfig, HandoffQueue


# =============================================================================
# PAYLOADS
# =============================================================================

SSHD_NOTIFICATION = (
    b'<monit id="abc" incarnation="1" version="5.6"><services>'
    b'<service type="3" name="sshd"><pid>100</pid></service>'
    b'</services></monit>'
)

STATUS_NOTIFICATION = b"""<?xml version="1.0" encoding="ISO-8859-1"?>
<monit id="host-1" incarnation="1700000000" version="5.33.0">
  <server><uptime>120</uptime><poll>30</poll><localhostname>db01</localhostname></server>
  <services>
    <service name="db01"><type>5</type>
      <collected_sec>1700000100</collected_sec><collected_usec>125000</collected_usec>
      <system><load><avg01>1.5</avg01></load></system>
    </service>
    <service name="postgres"><type>3</type>
      <collected_sec>1700000101</collected_sec><collected_usec>0</collected_usec>
      <pid>4242</pid><children>8</children>
    </service>
    <service name="/var/log/syslog"><type>2</type>
      <timestamp>1699999000</timestamp><size>1048576</size>
    </service>
    <service name="nightly"><type>7</type>
      <program><started>1700000000</started><status>1</status><output>exit 1</output></program>
    </service>
  </services>
  <servicegroups><servicegroup name="db"><service>postgres</service></servicegroup></servicegroups>
</monit>
"""

EVENT_NOTIFICATION = b"""<monit id="host-1" incarnation="1700000000" version="5.33.0">
  <event>
    <collected_sec>1700000200</collected_sec><collected_usec>0</collected_usec>
    <service>postgres</service><type>3</type><id>512</id><state>1</state><action>1</action>
    <message>process is not running</message><token>abc123</token>
  </event>
</monit>
"""

MALFORMED = b'<monit id="broken"><services><service></monit>'


# =============================================================================
# COLLECTOR FACTORIES
# =============================================================================

def create_collector(capacity: int = 1, publish_timeout: float = 1.0) -> Collector:
    config = CollectorConfig(queue_capacity=capacity, publish_timeout_seconds=publish_timeout)
    return Collector(HandoffQueue(capacity=config.queue_capacity), config)
