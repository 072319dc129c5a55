"""Directory connectivity check used by the admin panel.

Blocking ldap3 calls; run `test_connection` in a worker thread.
"""
import ssl

from ldap3 import NONE, SUBTREE, Connection, Server, Tls
from ldap3.core.exceptions import LDAPException
from loguru import logger

from portal.schemas.admin import LdapConfig

LDAPS_PORT = 636
TIMEOUT_SECONDS = 10
SEARCH_LIMIT = 5
SEARCH_ATTRIBUTES = ["cn", "uid", "sAMAccountName", "mail", "displayName", "objectClass"]


def _entry(entry) -> dict:
    attributes = {
        name: [str(value) for value in values]
        for name, values in entry.entry_attributes_as_dict.items()
    }
    return {"dn": entry.entry_dn, "attributes": attributes}


def test_connection(config: LdapConfig) -> dict:
    if not config.enabled or not config.host or not config.base_dn:
        return {
            "success": False,
            "error": "LDAP não configurado corretamente",
            "details": "Verifique se host, porta e Base DN estão preenchidos",
        }

    port = config.port or 389
    use_ssl = port == LDAPS_PORT
    protocol = "ldaps" if use_ssl else "ldap"
    url = f"{protocol}://{config.host}:{port}"
    results = {"success": False, "url": url, "protocol": protocol, "steps": []}
    steps = results["steps"]
    logger.info("LDAP test: connecting to {}", url)

    server = Server(
        config.host,
        port=port,
        use_ssl=use_ssl,
        tls=Tls(validate=ssl.CERT_NONE) if use_ssl else None,
        get_info=NONE,
        connect_timeout=TIMEOUT_SECONDS,
    )
    anonymous = not config.bind_dn and not config.bind_password
    connection = Connection(
        server,
        user=None if anonymous else config.bind_dn,
        password=None if anonymous else config.bind_password,
        receive_timeout=TIMEOUT_SECONDS,
    )

    try:
        if anonymous:
            steps.append({
                "step": "Anonymous Bind",
                "status": "info",
                "message": "Tentando conexão anônima (sem credenciais)",
            })
        if not connection.bind():
            steps.append({
                "step": "Anonymous Bind" if anonymous else "Service Account Bind",
                "status": "error",
                "message": connection.result.get("description", "bind failed"),
                "bindDn": config.bind_dn,
            })
            return results
        if not anonymous:
            steps.append({
                "step": "Service Account Bind",
                "status": "success",
                "message": "Conectado com sucesso",
                "bindDn": config.bind_dn,
            })

        connection.search(
            config.base_dn,
            "(objectClass=*)",
            search_scope=SUBTREE,
            attributes=SEARCH_ATTRIBUTES,
            size_limit=SEARCH_LIMIT,
        )
        entries = [_entry(entry) for entry in connection.entries]
        if entries:
            results["success"] = True
            steps.append({
                "step": "User Search",
                "status": "success",
                "message": f"Encontrados {len(entries)} registros",
                "entries": entries,
            })
        else:
            steps.append({
                "step": "User Search",
                "status": "warning",
                "message": "Nenhum registro encontrado no Base DN",
                "baseDn": config.base_dn,
            })
    except LDAPException as exc:
        logger.warning("LDAP test against {} failed: {}", url, exc)
        steps.append({"step": "Connection", "status": "error", "message": str(exc)})
    finally:
        if connection.bound:
            connection.unbind()

    return results
