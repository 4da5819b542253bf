"""
Tag management operations.

Tags are account-level labels that can be attached to hosts and certificates.  Attaching, detaching and deleting tags
return no useful body, so those operations report a fixed success message instead.
"""
import logging

from .core import HttpMethod
from .hosts import ip_address
from .operations import Location, Operation, Parameter, register

LOGGER = logging.getLogger(__name__)
"""The logger for this module"""


def tag_id():
    return Parameter("tagId", location=Location.PATH, required=True, display={
        "displayName": "Tag ID",
        "type": "string",
        "description": "Unique identifier of the tag",
    })


def tag_body():
    """
    The body parameters shared by tag creation and update.

    The color is nested under "metadata" and only sent when one was given.
    """
    return (
        Parameter("tagName", key="name", location=Location.BODY, required=True, display={
            "displayName": "Tag Name",
            "type": "string",
            "description": "Name for the tag",
        }),
        Parameter("tagColor", key="metadata.color", location=Location.BODY, display={
            "displayName": "Tag Color",
            "type": "string",
            "placeholder": "ff6113",
            "description": "Color for the tag (hex format without #, e.g., \"ff6113\")",
        }),
    )


def certificate_fingerprint():
    return Parameter("certificateFingerprint", location=Location.PATH, required=True, display={
        "displayName": "Certificate Fingerprint",
        "type": "string",
        "description": "SHA-256 fingerprint of the certificate",
    })


LIST_TAGS = Operation(
    "listTags", "List Tags", HttpMethod.GET, "/v2/tags",
    description="List all tags in the account")

CREATE_TAG = Operation(
    "createTag", "Create Tag", HttpMethod.POST, "/v2/tags",
    parameters=tag_body(),
    description="Create a new tag")

GET_TAG = Operation(
    "getTag", "Get Tag", HttpMethod.GET, "/v2/tags/{tagId}",
    parameters=(tag_id(),),
    description="Get a tag by ID")

UPDATE_TAG = Operation(
    "updateTag", "Update Tag", HttpMethod.PUT, "/v2/tags/{tagId}",
    parameters=(tag_id(),) + tag_body(),
    description="Rename or recolor a tag")

DELETE_TAG = Operation(
    "deleteTag", "Delete Tag", HttpMethod.DELETE, "/v2/tags/{tagId}",
    parameters=(tag_id(),),
    message="Tag deleted successfully",
    description="Delete a tag")

GET_HOST_TAGS = Operation(
    "getHostTags", "Get Host Tags", HttpMethod.GET, "/v2/hosts/{ipAddress}/tags",
    parameters=(ip_address(),),
    description="List the tags attached to a host")

ADD_HOST_TAG = Operation(
    "addHostTag", "Add Host Tag", HttpMethod.PUT, "/v2/hosts/{ipAddress}/tags/{tagId}",
    parameters=(ip_address(), tag_id()),
    message="Tag added to host successfully",
    description="Attach a tag to a host")

REMOVE_HOST_TAG = Operation(
    "removeHostTag", "Remove Host Tag", HttpMethod.DELETE, "/v2/hosts/{ipAddress}/tags/{tagId}",
    parameters=(ip_address(), tag_id()),
    message="Tag removed from host successfully",
    description="Detach a tag from a host")

GET_CERT_TAGS = Operation(
    "getCertTags", "Get Certificate Tags", HttpMethod.GET, "/v2/certificates/{certificateFingerprint}/tags",
    parameters=(certificate_fingerprint(),),
    description="List the tags attached to a certificate")

ADD_CERT_TAG = Operation(
    "addCertTag", "Add Certificate Tag", HttpMethod.PUT, "/v2/certificates/{certificateFingerprint}/tags/{tagId}",
    parameters=(certificate_fingerprint(), tag_id()),
    message="Tag added to certificate successfully",
    description="Attach a tag to a certificate")

REMOVE_CERT_TAG = Operation(
    "removeCertTag", "Remove Certificate Tag", HttpMethod.DELETE,
    "/v2/certificates/{certificateFingerprint}/tags/{tagId}",
    parameters=(certificate_fingerprint(), tag_id()),
    message="Tag removed from certificate successfully",
    description="Detach a tag from a certificate")

GET_TAG_HOSTS = Operation(
    "getTagHosts", "Get Tag Hosts", HttpMethod.GET, "/v2/tags/{tagId}/hosts",
    parameters=(tag_id(),),
    description="List the hosts carrying a tag")

GET_TAG_CERTIFICATES = Operation(
    "getTagCertificates", "Get Tag Certificates", HttpMethod.GET, "/v2/tags/{tagId}/certificates",
    parameters=(tag_id(),),
    description="List the certificates carrying a tag")

register(LIST_TAGS, CREATE_TAG, GET_TAG, UPDATE_TAG, DELETE_TAG,
         GET_HOST_TAGS, ADD_HOST_TAG, REMOVE_HOST_TAG,
         GET_CERT_TAGS, ADD_CERT_TAG, REMOVE_CERT_TAG,
         GET_TAG_HOSTS, GET_TAG_CERTIFICATES)
