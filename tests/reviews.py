import copy


CONTAINER_OK = {
    "name": "app",
    "image": "quay.io/example/app:latest",
    "resources": {
        "requests": {"memory": "256Mi", "cpu": "100m"},
        "limits": {"memory": "512Mi"},
    },
}

DEPLOYMENT = {
    "apiVersion": "apps/v1",
    "kind": "Deployment",
    "metadata": {"name": "example", "namespace": "default"},
    "spec": {
        "replicas": 1,
        "template": {
            "metadata": {"labels": {"app": "example"}},
            "spec": {"containers": [CONTAINER_OK]},
        },
    },
}

REVIEW = {
    "apiVersion": "admission.k8s.io/v1",
    "kind": "AdmissionReview",
    "request": {
        "uid": "705ab4f5-6393-11e8-b7cc-42010a800002",
        "kind": {"group": "apps", "version": "v1", "kind": "Deployment"},
        "resource": {"group": "apps", "version": "v1", "resource": "deployments"},
        "name": "example",
        "namespace": "default",
        "operation": "CREATE",
        "userInfo": {"username": "admin", "groups": ["system:authenticated"]},
        "object": DEPLOYMENT,
        "dryRun": False,
    },
}


def make_review(containers=None, **request):
    review = copy.deepcopy(REVIEW)
    if containers is not None:
        review["request"]["object"]["spec"]["template"]["spec"]["containers"] = (
            containers
        )
    review["request"].update(request)
    return review
