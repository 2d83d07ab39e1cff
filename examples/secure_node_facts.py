import json
import sys

from libpuppetdb import ConnectorError, ProcessingError, PuppetdbConnector, Query


def main():
    """
    Example: Fetching the facts of one node over mutual TLS.

    Demonstrates:
    - Building a secure connector from Puppet agent certificates
    - Passing a raw (not URL-encoded) PuppetDB query expression
    - Parsing the returned JSON text in the calling application
    """
    certname = sys.argv[1] if len(sys.argv) > 1 else "master"

    try:
        connector = PuppetdbConnector.with_tls(
            "puppetdb",
            "/etc/puppetlabs/puppet/ssl/certs/ca.pem",
            f"/etc/puppetlabs/puppet/ssl/certs/{certname}.pem",
            f"/etc/puppetlabs/puppet/ssl/private_keys/{certname}.pem",
        )
    except ConnectorError as e:
        print(f"Failed to initialize the connector: {e}")
        sys.exit(2)

    query = Query("facts", json.dumps(["=", "certname", certname]))

    try:
        result = connector.perform_query(query)
    except ProcessingError as e:
        print(f"Failed to perform the query: {e}")
        sys.exit(4)

    for fact in json.loads(result):
        print(f"{fact['name']}: {fact['value']}")
    print(f"Performed query: {connector.get_performed_query_url()}")


if __name__ == "__main__":
    main()
